import os
from functools import wraps

from flask import current_app, jsonify, session

# ── 공통 상수 ──
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ENV_FILE_PATH = os.path.join(BASE_DIR, ".env")

STORE_EXTENSION_KEY = "inquiry_store"


# ── 응답 형식 {success, data?, message?, errors?} ──
def success_response(data=None, message=None, status=200):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return jsonify(body), status


def error_response(message, status, errors=None):
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def get_store():
    return current_app.extensions[STORE_EXTENSION_KEY]


# ── 인증 데코레이터 ──
def require_admin(f):
    """관리자 세션 인증 데코레이터. 미인증 시 JSON 401 응답."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not session.get("is_admin"):
            return error_response("访问令牌缺失，请先登录", 401)
        return f(*args, **kwargs)

    return decorated_function
