from flask import Blueprint, request, current_app

from dashboard import DashboardState, reduce, visible_students, SAVE_ERROR_MESSAGE
from decorators import teacher_required
from errors import (
    InvalidActionError, InvalidMaxScoreError, RosterUnavailableError,
    SaveInProgressError, SheetAPIError
)
from room_aggregator import distinct_rooms, room_counts, room_statistics, top_scorers_by_room
from roster import ALL_ROOMS
from status_classifier import classify

# Import helpers
from .helpers import (
    error_response, success_response, get_store, load_snapshot, student_result,
    unavailable_or_invalid, data_unavailable_response
)

teacher_bp = Blueprint('teacher', __name__)

# ====================== TEACHER ROUTES ======================


@teacher_bp.route('/report', methods=['GET'])
@teacher_required
def get_report():
    """Score table filtered by room and sorted by number or score"""
    try:
        snapshot = load_snapshot()
    except (RosterUnavailableError, InvalidMaxScoreError) as e:
        return unavailable_or_invalid(e)

    state = DashboardState()
    try:
        state = reduce(state, {'type': 'SELECT_ROOM', 'room': request.args.get('room') or ALL_ROOMS})
        state = reduce(state, {
            'type': 'SET_SORT',
            'key': request.args.get('sort', state.sort.key),
            'direction': request.args.get('direction', state.sort.direction)
        })
    except InvalidActionError as e:
        return error_response('INVALID_REPORT_QUERY', 'รูปแบบการค้นหาไม่ถูกต้อง', {'reason': str(e)})

    max_score = snapshot.config.max_score
    students = snapshot.students
    rows = [student_result(s, max_score) for s in visible_students(state, students)]
    rooms = distinct_rooms(students)

    return success_response(
        'ดึงรายงานผลสำเร็จ',
        {
            'students': rows,
            'filters': {
                'room': state.selected_room,
                'sort': state.sort.key,
                'direction': state.sort.direction
            },
            'room_options': room_counts(students, rooms),
            'total_students': len(students),
            'max_score': max_score
        }
    )


@teacher_bp.route('/top-scorers', methods=['GET'])
@teacher_required
def get_top_scorers():
    """Top score in every room, with all tied students"""
    try:
        snapshot = load_snapshot()
    except (RosterUnavailableError, InvalidMaxScoreError) as e:
        return unavailable_or_invalid(e)

    max_score = snapshot.config.max_score
    students = snapshot.students
    entries = top_scorers_by_room(students, distinct_rooms(students))

    return success_response(
        'ดึงคะแนนสูงสุดรายห้องสำเร็จ',
        {
            'rooms': [
                {
                    'room': entry.room,
                    'top_score': entry.top_score,
                    'students': [
                        {**s.to_dict(), 'status': classify(s.score, max_score, s.status).to_dict()}
                        for s in entry.tied_students
                    ]
                }
                for entry in entries
            ],
            'max_score': max_score
        }
    )


@teacher_bp.route('/averages', methods=['GET'])
@teacher_required
def get_averages():
    """Average, min and max per room plus the overall average"""
    try:
        snapshot = load_snapshot()
    except (RosterUnavailableError, InvalidMaxScoreError) as e:
        return unavailable_or_invalid(e)

    max_score = snapshot.config.max_score
    students = snapshot.students
    report = room_statistics(students, distinct_rooms(students))

    return success_response(
        'ดึงสถิติคะแนนเฉลี่ยสำเร็จ',
        {
            'rooms': [
                {
                    **stat.to_dict(),
                    'average_percentage': stat.average / max_score * 100,
                    'is_above_overall': report.is_above_overall(stat)
                }
                for stat in report.rooms
            ],
            'overall_average': report.overall_average,
            'overall_percentage': report.overall_average / max_score * 100,
            'total_students': report.total_students,
            'max_score': max_score
        }
    )


@teacher_bp.route('/refresh', methods=['POST'])
@teacher_required
def refresh_roster():
    """Pull the latest roster and config from the score sheet"""
    try:
        snapshot = get_store().refresh()
    except SheetAPIError as e:
        current_app.logger.error(f"Roster refresh failed: {str(e)}")
        return data_unavailable_response(e)

    return success_response('รีเฟรชข้อมูลสำเร็จ', snapshot.to_dict())


@teacher_bp.route('/settings', methods=['GET'])
@teacher_required
def get_settings():
    """Current display settings"""
    return success_response('ดึงข้อมูลการตั้งค่าสำเร็จ', {'config': get_store().config.to_dict()})


@teacher_bp.route('/settings', methods=['PUT'])
@teacher_required
def update_settings():
    """Edit display settings and save them to the score sheet"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return error_response('MISSING_SETTINGS', 'กรุณาระบุการตั้งค่าที่ต้องการบันทึก')

    store = get_store()
    state = reduce(DashboardState(active_tab='settings'), {'type': 'OPEN_DRAFT', 'config': store.config})
    state = reduce(state, {'type': 'EDIT_DRAFT', 'changes': data})
    draft = state.draft_config

    if not draft.is_valid():
        return error_response(
            'INVALID_MAX_SCORE',
            'คะแนนเต็มต้องมากกว่า 0',
            {'max_score': draft.max_score}
        )

    state = reduce(state, {'type': 'SAVE_STARTED'})
    try:
        store.save_config(draft)
    except SaveInProgressError:
        return error_response(
            'SAVE_IN_PROGRESS',
            'กำลังบันทึกการตั้งค่า กรุณารอสักครู่',
            status_code=409
        )
    except SheetAPIError as e:
        current_app.logger.error(f"Save failed: {str(e)}")
        state = reduce(state, {'type': 'SAVE_FAILED', 'message': SAVE_ERROR_MESSAGE})
        return error_response(
            'SAVE_FAILED',
            state.save_message,
            {'reason': str(e), 'upstream_status': e.status_code},
            502
        )

    state = reduce(state, {'type': 'SAVE_SUCCEEDED'})
    return success_response(state.save_message, {'config': draft.to_dict()})
