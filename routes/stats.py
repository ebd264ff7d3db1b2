"""관리자 대시보드 통계 블루프린트 (응답 캐시 적용)"""

import logging

from flask import Blueprint, request

from routes.utils import error_response, get_store, require_admin, success_response
from services.cache_service import cached
from services.stats_service import dashboard_stats, inquiry_trends

logger = logging.getLogger(__name__)

stats_bp = Blueprint("stats", __name__, url_prefix="/api/stats")

MAX_TREND_DAYS = 365


@stats_bp.route("/dashboard")
@require_admin
@cached(ttl=300)
def dashboard():
    return success_response(dashboard_stats(get_store()))


@stats_bp.route("/inquiry-trends")
@require_admin
@cached(ttl=300)
def trends():
    days = request.args.get("days", 30, type=int)
    if days is None or not 1 <= days <= MAX_TREND_DAYS:
        return error_response("参数验证失败", 400,
                              [{"field": "days", "message": f"取值范围 1-{MAX_TREND_DAYS}"}])
    return success_response(inquiry_trends(get_store(), days))
