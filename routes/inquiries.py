"""询价 관리 API 블루프린트: 공개 접수 + 관리자 CRUD/일괄작업/CSV 내보내기.

저장소 예외(ValidationError, NotFoundError 등)는 app.py 의 errorhandler 가
공통 응답 형식으로 변환한다.
"""
import logging

from flask import Blueprint, Response, current_app, request

from routes.utils import get_store, require_admin, success_response
from services.cache_service import get_cache
from services.csv_export import export_filename
from services.validators import (
    validate_batch,
    validate_create,
    validate_export_query,
    validate_list_query,
    validate_replace,
    validate_status_patch,
)

logger = logging.getLogger(__name__)

inquiries_bp = Blueprint("inquiries", __name__, url_prefix="/api/inquiries")

STATS_CACHE_PATTERN = "/api/stats*"


def _invalidate_stats():
    get_cache().clear(STATS_CACHE_PATTERN)


@inquiries_bp.route("", methods=["GET"])
@require_admin
def list_inquiries():
    query = validate_list_query(
        request.args,
        current_app.config.get("DEFAULT_PAGE_SIZE", 10),
        current_app.config.get("MAX_PAGE_SIZE", 100),
    )
    return success_response(get_store().list(**query))


@inquiries_bp.route("/<inquiry_id>", methods=["GET"])
@require_admin
def get_inquiry(inquiry_id):
    return success_response(get_store().get(inquiry_id).to_dict())


@inquiries_bp.route("", methods=["POST"])
def create_inquiry():
    """공개 접수: 상태는 항상 PENDING, ID/询价单号는 서버에서 생성"""
    fields = validate_create(request.get_json(silent=True))
    inquiry = get_store().create(fields)
    _invalidate_stats()
    return success_response(inquiry.to_dict(), "询价提交成功", 201)


@inquiries_bp.route("/<inquiry_id>/status", methods=["PATCH"])
@require_admin
def update_inquiry_status(inquiry_id):
    status, optional = validate_status_patch(request.get_json(silent=True))
    inquiry = get_store().update_status(inquiry_id, status, **optional)
    _invalidate_stats()
    return success_response(inquiry.to_dict(), "询价状态更新成功")


@inquiries_bp.route("/<inquiry_id>", methods=["PUT"])
@require_admin
def replace_inquiry(inquiry_id):
    fields, optional = validate_replace(request.get_json(silent=True))
    inquiry = get_store().replace(inquiry_id, fields, optional)
    _invalidate_stats()
    return success_response(inquiry.to_dict(), "询价信息更新成功")


@inquiries_bp.route("/<inquiry_id>", methods=["DELETE"])
@require_admin
def delete_inquiry(inquiry_id):
    get_store().delete(inquiry_id)
    _invalidate_stats()
    return success_response(message="询价记录删除成功")


@inquiries_bp.route("/batch", methods=["POST"])
@require_admin
def batch_inquiries():
    action, ids, status = validate_batch(request.get_json(silent=True))
    affected = get_store().batch(action, ids, status)
    _invalidate_stats()

    if action == "delete":
        message = f"成功删除 {affected} 条询价记录"
    else:
        message = f"成功更新 {affected} 条询价记录状态"
    return success_response({"requested": len(ids), "affected": affected}, message)


@inquiries_bp.route("/export/csv", methods=["GET"])
@require_admin
def export_inquiries_csv():
    status, start_date, end_date = validate_export_query(request.args)
    content = get_store().export_csv(status, start_date, end_date)
    logger.info("CSV export requested (status=%s, start=%s, end=%s)", status, start_date, end_date)
    return Response(
        content.encode("utf-8"),
        mimetype="text/csv",
        headers={
            "Content-Type": "text/csv; charset=utf-8",
            "Content-Disposition": f'attachment; filename="{export_filename()}"',
        },
    )
