import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class Config:
    # Basic Flask config
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key'

    # Remote score sheet (Google Apps Script web app)
    SCORE_API_URL = os.environ.get('SCORE_API_URL') or \
        'https://script.google.com/macros/s/AKfycbyRM57bEWtXI5DSkQ2jeuXxhTXzRAaAEbnJJSPFRAsKXiHBpneokX68v4jNRZ7bdxxaiw/exec'
    SCORE_API_TIMEOUT = float(os.environ.get('SCORE_API_TIMEOUT', 15.0))
    FETCH_ON_STARTUP = os.environ.get('FETCH_ON_STARTUP', '1') == '1'

    # Teacher dashboard password
    TEACHER_PASSWORD = os.environ.get('TEACHER_PASSWORD') or '2521'

    # JWT config
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'jwt-secret-key'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.environ.get('JWT_ACCESS_TOKEN_EXPIRES', 3600)))
    JWT_ALGORITHM = 'HS256'

    # Redis config for token blacklist
    REDIS_URL = os.environ.get('REDIS_URL') or 'redis://localhost:6379/0'

    # CORS config
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Display defaults, overwritten field by field by the sheet's config
    DEFAULT_DISPLAY_CONFIG = {
        'logoUrl': os.environ.get('DEFAULT_LOGO_URL') or 'https://img5.pic.in.th/file/secure-sv1/nw_logo-removebg.png',
        'headerTitle': os.environ.get('DEFAULT_HEADER_TITLE') or 'ประกาศคะแนนสอบวัดผลการเรียนรู้',
        'headerSubtitle': os.environ.get('DEFAULT_HEADER_SUBTITLE') or 'รายวิชาคณิตศาสตร์พื้นฐาน 4 ค22102',
        'examName': os.environ.get('DEFAULT_EXAM_NAME') or 'การสอบ วัดผลการเรียนรู้กลางภาค 2/68',
        'maxScore': int(os.environ.get('DEFAULT_MAX_SCORE', 20)),
    }

class DevelopmentConfig(Config):
    DEBUG = True

class ProductionConfig(Config):
    DEBUG = False

class TestingConfig(Config):
    TESTING = True
    FETCH_ON_STARTUP = False
    SCORE_API_URL = 'https://sheet.test/exec'
    TEACHER_PASSWORD = '2521'

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
