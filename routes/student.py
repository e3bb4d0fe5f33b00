from flask import Blueprint, request, current_app

from errors import (
    InvalidMaxScoreError, InvalidStudentIdError, RosterUnavailableError, SheetAPIError
)
from roster import find_by_id, require_student_id

# Import helpers
from .helpers import (
    error_response, success_response, get_store, load_snapshot, student_result,
    unavailable_or_invalid, data_unavailable_response
)

student_bp = Blueprint('student', __name__)

# ====================== STUDENT ROUTES ======================


@student_bp.route('/config', methods=['GET'])
def get_display_config():
    """Header/logo settings for the landing page"""
    store = get_store()
    return success_response(
        'ดึงข้อมูลการตั้งค่าสำเร็จ',
        {
            'config': store.config.to_dict(),
            'loaded': store.loaded,
            'last_error': store.last_error
        }
    )


@student_bp.route('/lookup', methods=['POST'])
def lookup_score():
    """Look up one student's score by 5-digit id"""
    data = request.get_json(silent=True) or {}

    try:
        student_id = require_student_id(str(data.get('student_id') or ''))
    except InvalidStudentIdError as e:
        return error_response(
            'INVALID_STUDENT_ID',
            'กรุณากรอกรหัสประจำตัว 5 หลัก',
            {'student_id': e.student_id, 'expected_length': e.expected_length}
        )

    try:
        snapshot = load_snapshot()
    except (RosterUnavailableError, InvalidMaxScoreError) as e:
        return unavailable_or_invalid(e)

    student = find_by_id(snapshot.students, student_id)
    if student is None:
        return error_response(
            'STUDENT_NOT_FOUND',
            'ไม่พบข้อมูลนักเรียน กรุณาตรวจสอบรหัสอีกครั้ง',
            {'student_id': student_id},
            404
        )

    max_score = snapshot.config.max_score
    return success_response(
        'ค้นหาข้อมูลสำเร็จ',
        {
            'student': student_result(student, max_score),
            'max_score': max_score,
            'exam_name': snapshot.config.exam_name
        }
    )


@student_bp.route('/reload', methods=['POST'])
def reload_roster():
    """Fetch the roster again after a failed load"""
    try:
        snapshot = get_store().refresh()
    except SheetAPIError as e:
        current_app.logger.error(f"Roster reload failed: {str(e)}")
        return data_unavailable_response(e)

    return success_response('โหลดข้อมูลสำเร็จ', snapshot.to_dict())
