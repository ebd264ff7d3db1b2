import atexit
import logging
import os
from datetime import datetime, timezone

from flask import Flask, request
from dotenv import load_dotenv
from flask_wtf.csrf import CSRFProtect
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

# .env 파일에서 환경변수 로드
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(BASE_DIR, '.env'), override=True)

from config import config_by_name
from routes.utils import STORE_EXTENSION_KEY, error_response, get_store
from services.cache_service import EXTENSION_KEY as CACHE_EXTENSION_KEY, ResponseCache, get_cache
from services.errors import InquiryError, ValidationError
from services.inquiry_store import InquiryStore

app = Flask(__name__)
# Nginx 프록시 뒤에서 HTTPS 관련 헤더 정보를 올바르게 처리하기 위해 적용
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

# 환경 설정 적용 (기본값 production)
env_name = os.environ.get('FLASK_ENV', 'production')
app_config = config_by_name[env_name]()
app.config.from_object(app_config)
app.json.ensure_ascii = False

# 로깅 설정 적용
LOG_DIR = os.path.join(BASE_DIR, 'logs')
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

from logging.config import dictConfig
dictConfig(app_config.get_logging_config(LOG_DIR))

logger = logging.getLogger(__name__)

# 초기화
csrf = CSRFProtect(app)

# 询价 저장소 / 응답 캐시: 시작 시 한 번 생성, 종료 시 정리
app.extensions[STORE_EXTENSION_KEY] = InquiryStore(app.config['INQUIRIES_FILE'])
app.extensions[CACHE_EXTENSION_KEY] = ResponseCache.connect(
    app.config.get('REDIS_URL'), app.config.get('CACHE_TTL', 300)
)
atexit.register(lambda: app.extensions[CACHE_EXTENSION_KEY].close())

# Blueprint 중앙 등록
from routes import register_blueprints
register_blueprints(app, csrf)


@app.route('/health')
def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": app.config['SERVICE_NAME'],
        "version": app.config['SERVICE_VERSION'],
        "storage": os.path.exists(get_store().path),
        "cache": get_cache().enabled,
    }


@app.after_request
def set_security_headers(response):
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    return response


# ── 오류 처리 (공통 응답 형식) ──

@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return error_response(e.message, e.status_code, e.errors)


@app.errorhandler(InquiryError)
def handle_inquiry_error(e):
    if e.status_code >= 500:
        logger.error("Inquiry operation failed on %s %s: %s", request.method, request.path, e)
    return error_response(e.message, e.status_code)


@app.errorhandler(404)
def page_not_found(e):
    return error_response(f"路由 {request.path} 不存在", 404)


@app.errorhandler(405)
def method_not_allowed(e):
    return error_response("请求方法不允许", 405)


@app.errorhandler(HTTPException)
def handle_http_exception(e):
    return error_response(e.description or e.name, e.code or 500)


@app.errorhandler(500)
def internal_server_error(e):
    logger.exception("500 Internal Server Error: %s", e)
    return error_response("服务器内部错误", 500)


if __name__ == '__main__':
    use_debug = os.environ.get('FLASK_DEBUG', '0') == '1'
    app.run(host='127.0.0.1', port=int(os.environ.get('PORT', 3001)), debug=use_debug)
