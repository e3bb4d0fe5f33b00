from flask import Blueprint, request, current_app
from flask_jwt_extended import create_access_token, jwt_required, get_jwt
import bcrypt

from decorators import TEACHER_ROLE, blacklist_token

# Import helpers
from .helpers import error_response, success_response

auth_bp = Blueprint('auth', __name__)

# ====================== AUTH ROUTES ======================

def hash_password(password):
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())

def check_teacher_password(password):
    """Compare against the configured teacher password hash"""
    password_hash = current_app.extensions['teacher_password_hash']
    return bcrypt.checkpw(password.encode('utf-8'), password_hash)

@auth_bp.route('/login', methods=['POST'])
def login():
    """Teacher login with the shared dashboard password"""
    data = request.get_json(silent=True) or {}
    password = data.get('password')

    if not password or not isinstance(password, str):
        return error_response(
            'MISSING_CREDENTIALS',
            'กรุณากรอกรหัสผ่าน',
            {'required_fields': ['password']}
        )

    if not check_teacher_password(password):
        current_app.logger.warning("Failed teacher login attempt")
        return error_response('INVALID_CREDENTIALS', 'รหัสผ่านไม่ถูกต้อง', status_code=401)

    access_token = create_access_token(identity=TEACHER_ROLE, additional_claims={'role': TEACHER_ROLE})
    expires = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']

    return success_response(
        'เข้าสู่ระบบสำเร็จ',
        {
            'access_token': access_token,
            'expires_in': int(expires.total_seconds()),
            'role': TEACHER_ROLE
        }
    )

@auth_bp.route('/logout', methods=['POST'])
@jwt_required()
def logout():
    """Revoke the current token"""
    jti = get_jwt()['jti']
    expires_delta = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']

    if blacklist_token(jti, int(expires_delta.total_seconds())):
        return success_response('ออกจากระบบเรียบร้อยแล้ว')

    return error_response('LOGOUT_FAILED', 'ออกจากระบบไม่สำเร็จ กรุณาลองใหม่', status_code=500)
