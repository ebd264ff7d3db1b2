import hmac
import logging
import os

import bcrypt
from dotenv import dotenv_values
from flask import Blueprint, request, session

from routes.utils import ENV_FILE_PATH, error_response, require_admin, success_response

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def _configured_password() -> str:
    """.env 파일의 ADMIN_PASSWORD 우선, 없으면 프로세스 환경변수"""
    return dotenv_values(ENV_FILE_PATH).get("ADMIN_PASSWORD") or os.environ.get("ADMIN_PASSWORD", "")


def _password_matches(candidate: str, configured: str) -> bool:
    given, expected = candidate.encode("utf-8"), configured.encode("utf-8")
    if not configured.startswith(BCRYPT_PREFIXES):
        return hmac.compare_digest(given, expected)
    try:
        return bcrypt.checkpw(given, expected)
    except ValueError:
        # 해시 형식이 깨진 경우
        return False


@auth_bp.route("/login", methods=["POST"])
def login():
    configured = _configured_password()
    if not configured:
        logger.error("ADMIN_PASSWORD environment variable is not set")
        return error_response("服务器配置错误：未设置管理员密码", 500)

    password = (request.get_json(silent=True) or {}).get("password")
    if not isinstance(password, str) or not password:
        return error_response("参数验证失败", 400,
                              [{"field": "password", "message": "密码不能为空"}])

    # ProxyFix 적용 후의 remote_addr 는 실제 클라이언트 주소
    if not _password_matches(password, configured):
        logger.warning("Admin login failed from %s", request.remote_addr)
        return error_response("用户名或密码错误", 401)

    session.clear()
    session["is_admin"] = True
    session.permanent = True
    logger.info("Admin login success from %s", request.remote_addr)
    return success_response({"user": {"role": "ADMIN"}}, "登录成功")


@auth_bp.route("/logout", methods=["POST"])
def logout():
    session.clear()
    return success_response(message="已退出登录")


@auth_bp.route("/me")
@require_admin
def me():
    return success_response({"role": "ADMIN"})
