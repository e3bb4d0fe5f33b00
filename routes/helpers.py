from datetime import datetime
from flask import current_app, jsonify, make_response

from errors import InvalidMaxScoreError, RosterUnavailableError
from status_classifier import classify, format_percentage, is_passing, percentage

DATA_UNAVAILABLE_MESSAGE = 'ไม่สามารถเชื่อมต่อกับฐานข้อมูลได้ กรุณาลองใหม่อีกครั้ง'
INVALID_CONFIGURATION_MESSAGE = 'คะแนนเต็มต้องมากกว่า 0 กรุณาตรวจสอบการตั้งค่า'

# ====================== RESPONSE HELPERS ======================
# Helper function for error responses
def error_response(error_code, message, details=None, status_code=400):
    """Standardized error response format"""
    response_data = {
        'error': error_code,
        'message': message,
        'timestamp': datetime.utcnow().isoformat(),
        'status_code': status_code
    }
    if details:
        response_data['details'] = details

    response = make_response(jsonify(response_data), status_code)
    response.headers["Content-Type"] = "application/json; charset=utf-8"
    return response

# Helper function for success responses
def success_response(message, data=None, status_code=200):
    """Standardized success response format"""
    response_data = {
        'success': True,
        'message': message,
        'timestamp': datetime.utcnow().isoformat(),
        'status_code': status_code
    }
    if data is not None:
        response_data['data'] = data

    response = make_response(jsonify(response_data), status_code)
    response.headers["Content-Type"] = "application/json; charset=utf-8"
    return response

# ====================== ROSTER HELPERS ======================
def get_store():
    return current_app.extensions['roster_store']

def data_unavailable_response(error):
    current_app.logger.warning(f"Roster unavailable: {error}")
    return error_response(
        'DATA_UNAVAILABLE',
        DATA_UNAVAILABLE_MESSAGE,
        {'reason': str(error), 'action_required': 'Reload the roster and try again'},
        503
    )

def invalid_configuration_response(error):
    current_app.logger.error(f"Invalid display configuration: {error}")
    return error_response(
        'INVALID_CONFIGURATION',
        INVALID_CONFIGURATION_MESSAGE,
        {'max_score': error.max_score},
        503
    )

def load_snapshot():
    """Current snapshot with a usable max score.

    Raises RosterUnavailableError or InvalidMaxScoreError.
    """
    snapshot = get_store().current()
    if not snapshot.config.is_valid():
        raise InvalidMaxScoreError(snapshot.config.max_score)
    return snapshot

def student_result(student, max_score):
    """Student row with its status band and percentage"""
    status = classify(student.score, max_score, student.status)
    value = percentage(student.score, max_score)
    return {
        **student.to_dict(),
        'status': status.to_dict(),
        'sheet_status': student.status,
        'percentage': value,
        'percentage_display': format_percentage(value),
        'is_passing': is_passing(student.score, max_score)
    }

def unavailable_or_invalid(error):
    if isinstance(error, InvalidMaxScoreError):
        return invalid_configuration_response(error)
    if isinstance(error, RosterUnavailableError):
        return data_unavailable_response(error)
    raise error
