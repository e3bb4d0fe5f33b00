from functools import wraps
from flask import jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt
from datetime import datetime
import redis

TEACHER_ROLE = 'teacher'

# Redis client for token blacklist
redis_client = None

def init_redis(app):
    global redis_client
    redis_client = redis.from_url(app.config['REDIS_URL'])

def teacher_required(f):
    """Decorator to require a valid teacher token"""
    @wraps(f)
    @jwt_required()
    def decorated(*args, **kwargs):
        claims = get_jwt()
        if claims.get('role') != TEACHER_ROLE:
            return jsonify({
                'error': 'INSUFFICIENT_PERMISSIONS',
                'message': 'สำหรับครูผู้สอนเท่านั้น',
                'details': {
                    'required_role': TEACHER_ROLE,
                    'endpoint': f.__name__,
                    'action_required': 'Please login with the teacher password'
                },
                'timestamp': datetime.utcnow().isoformat(),
                'status_code': 403
            }), 403

        return f(*args, **kwargs)

    return decorated

def blacklist_token(jti, expires_delta):
    """Add token to blacklist"""
    try:
        redis_client.setex(f"blacklist:{jti}", expires_delta, "true")
        return True
    except redis.RedisError as e:
        current_app.logger.error(f"Failed to blacklist token: {str(e)}")
        return False

def is_token_blacklisted(jti):
    """Check if token is blacklisted"""
    try:
        return redis_client.get(f"blacklist:{jti}") is not None
    except redis.RedisError as e:
        current_app.logger.warning(f"Token blacklist lookup failed: {str(e)}")
        return False
