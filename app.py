from flask import Flask, jsonify
from flask_jwt_extended import JWTManager
from flask_cors import CORS
import logging
import os
from datetime import datetime
from config import config
from routes import auth_bp, student_bp, teacher_bp
from routes.auth import hash_password
from decorators import init_redis, is_token_blacklisted
from errors import SheetAPIError
from roster_store import RosterStore
from sheet_client import SheetClient

def create_app(config_name=None, sheet_client=None):
    """Application factory"""
    app = Flask(__name__)

    # Load configuration
    config_name = config_name or os.getenv('FLASK_ENV', 'development')
    app.config.from_object(config[config_name])
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
    )

    # Initialize extensions
    jwt = JWTManager(app)
    CORS(app, origins=app.config['CORS_ORIGINS'])

    # Initialize Redis for token blacklist
    init_redis(app)

    app.extensions['teacher_password_hash'] = hash_password(app.config['TEACHER_PASSWORD'])

    client = sheet_client or SheetClient(app.config['SCORE_API_URL'], timeout=app.config['SCORE_API_TIMEOUT'])
    store = RosterStore.from_app_config(client, app.config)
    app.extensions['roster_store'] = store

    if app.config['FETCH_ON_STARTUP']:
        try:
            store.refresh()
        except SheetAPIError as e:
            app.logger.error(f"Initial roster load failed, serving error state: {str(e)}")

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        return is_token_blacklisted(jwt_payload['jti'])

    # JWT Error Handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({
            'error': 'TOKEN_EXPIRED',
            'message': 'หมดเวลาการเข้าสู่ระบบ กรุณาเข้าสู่ระบบใหม่',
            'details': {
                'expired_at': datetime.fromtimestamp(jwt_payload['exp']).isoformat(),
                'action_required': 'Login again to get a new access token'
            },
            'timestamp': datetime.utcnow().isoformat(),
            'status_code': 401
        }), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({
            'error': 'INVALID_TOKEN',
            'message': 'โทเคนไม่ถูกต้อง',
            'details': {
                'reason': str(error),
                'action_required': 'Please provide a valid JWT token'
            },
            'timestamp': datetime.utcnow().isoformat(),
            'status_code': 401
        }), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({
            'error': 'TOKEN_REQUIRED',
            'message': 'กรุณาเข้าสู่ระบบครูผู้สอนก่อน',
            'details': {
                'reason': 'Authorization header is missing or malformed',
                'expected_format': 'Authorization: Bearer <your_jwt_token>',
                'action_required': 'Please login to get an access token'
            },
            'timestamp': datetime.utcnow().isoformat(),
            'status_code': 401
        }), 401

    @jwt.revoked_token_loader
    def revoked_token_callback(jwt_header, jwt_payload):
        return jsonify({
            'error': 'TOKEN_REVOKED',
            'message': 'ออกจากระบบแล้ว กรุณาเข้าสู่ระบบใหม่',
            'details': {
                'reason': 'Token has been revoked (user logged out)',
                'action_required': 'Please login again to get a new token'
            },
            'timestamp': datetime.utcnow().isoformat(),
            'status_code': 401
        }), 401

    # Global Error Handlers
    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({
            'error': 'BAD_REQUEST',
            'message': 'คำขอไม่ถูกต้อง',
            'details': {
                'reason': str(error.description) if hasattr(error, 'description') else 'Invalid request format or missing required fields',
                'status_code': 400
            },
            'timestamp': datetime.utcnow().isoformat()
        }), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'NOT_FOUND',
            'message': 'ไม่พบหน้าที่ต้องการ',
            'details': {
                'reason': 'The requested endpoint was not found on this server',
                'available_endpoints': {
                    'auth': '/api/auth',
                    'student': '/api/student',
                    'teacher': '/api/teacher'
                },
                'status_code': 404
            },
            'timestamp': datetime.utcnow().isoformat()
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'error': 'METHOD_NOT_ALLOWED',
            'message': 'ไม่รองรับเมธอดนี้',
            'details': {
                'reason': f'Method {error.description} is not allowed for this endpoint',
                'allowed_methods': list(error.valid_methods) if getattr(error, 'valid_methods', None) else [],
                'status_code': 405
            },
            'timestamp': datetime.utcnow().isoformat()
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Unhandled server error: {error}")
        return jsonify({
            'error': 'INTERNAL_SERVER_ERROR',
            'message': 'เกิดข้อผิดพลาดภายในระบบ',
            'details': {
                'reason': 'An unexpected error occurred on the server',
                'action_required': 'Please try again later or contact administrator',
                'status_code': 500
            },
            'timestamp': datetime.utcnow().isoformat()
        }), 500

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(student_bp, url_prefix='/api/student')
    app.register_blueprint(teacher_bp, url_prefix='/api/teacher')

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {
            'status': 'healthy' if store.loaded else 'degraded',
            'message': 'ScoreQuest API is running',
            'roster_loaded': store.loaded,
            'last_error': store.last_error,
            'timestamp': datetime.utcnow().isoformat()
        }, 200

    # Root endpoint
    @app.route('/')
    def index():
        return {
            'message': 'ScoreQuest - ระบบประกาศคะแนนสอบออนไลน์',
            'version': '1.0.0',
            'endpoints': {
                'auth': '/api/auth',
                'student': '/api/student',
                'teacher': '/api/teacher'
            },
            'timestamp': datetime.utcnow().isoformat()
        }, 200

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=5000, debug=True)
