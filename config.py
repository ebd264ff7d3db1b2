import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """기본 설정 (모든 환경 공통)"""
    SECRET_KEY = os.environ.get('SECRET_KEY')
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB 제한 (전체 요청 크기)

    SERVICE_NAME = '施小雅板材后端API'
    SERVICE_VERSION = '1.0.0'

    # ── 询价 저장소 (JSON 파일) ──
    DATA_DIR = os.environ.get('DATA_DIR', os.path.join(BASE_DIR, 'data'))
    INQUIRIES_FILE = os.environ.get('INQUIRIES_FILE', os.path.join(DATA_DIR, 'inquiries.json'))

    # ── 응답 캐시 (비어 있으면 비활성) ──
    REDIS_URL = os.environ.get('REDIS_URL', '')
    CACHE_TTL = int(os.environ.get('CACHE_TTL', 300))  # 초

    # ── 목록 페이지 크기 ──
    DEFAULT_PAGE_SIZE = int(os.environ.get('DEFAULT_PAGE_SIZE', 10))
    MAX_PAGE_SIZE = int(os.environ.get('MAX_PAGE_SIZE', 100))

    # 세션 보안 기본 설정 (오버라이딩 가능)
    SESSION_COOKIE_HTTPONLY = True  # 자바스크립트에서 쿠키 접근 차단 (XSS 방지)
    SESSION_COOKIE_SAMESITE = 'Lax' # CSRF 방지
    PERMANENT_SESSION_LIFETIME = 60 * 60 * 8  # 8시간 (초 단위)

    # 로깅 설정
    @staticmethod
    def get_logging_config(log_dir):
        return {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
                }
            },
            'handlers': {
                'file': {
                    'class': 'logging.handlers.RotatingFileHandler',
                    'filename': os.path.join(log_dir, 'inquiry_api.log'),
                    'maxBytes': 1024 * 1024 * 10, # 10MB
                    'backupCount': 5,
                    'formatter': 'default',
                    'encoding': 'utf-8'
                },
                'console': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'default'
                }
            },
            'root': {
                'level': 'INFO',
                'handlers': ['file', 'console']
            }
        }

class DevelopmentConfig(Config):
    """개발 환경 설정"""
    DEBUG = True
    SESSION_COOKIE_SECURE = False  # 개발 환경(HTTP)에서는 False

class TestingConfig(DevelopmentConfig):
    """테스트 설정: CSRF 비활성, 캐시 비활성"""
    TESTING = True
    WTF_CSRF_ENABLED = False
    REDIS_URL = ''

class ProductionConfig(Config):
    """운영 환경 설정"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True   # 운영 환경(HTTPS)에서는 True (쿠키 암호화 전송 강제)

    # 운영 환경 필수값 검증
    def __init__(self):
        if not self.SECRET_KEY:
            raise RuntimeError("SECRET_KEY environment variable is not set")
        if not os.environ.get('ADMIN_PASSWORD'):
            raise RuntimeError("ADMIN_PASSWORD environment variable is not set")

# 환경 변수에 따라 설정 클래스 선택
config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
