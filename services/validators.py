"""요청 파라미터 검증: 저장소 접근 전에 ValidationError 로 거부한다."""
import re

from models.inquiry import SORT_ACCESSORS, SORT_ORDERS, STATUSES, URGENCIES, parse_iso
from services.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MAX_NAME_LENGTH = 100
MAX_COMPANY_LENGTH = 200
MAX_PRODUCT_LENGTH = 200
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# 상태 변경 시 선택 필드 (JSON 키, 속성명)
STATUS_OPTIONAL_FIELDS = (
    ("notes", "notes"),
    ("quotedPrice", "quoted_price"),
    ("adminReply", "admin_reply"),
)
REPLACE_OPTIONAL_FIELDS = (
    ("quotedPrice", "quoted_price"),
    ("notes", "notes"),
)


class _Collector:
    def __init__(self):
        self.errors = []

    def add(self, field, message):
        self.errors.append({"field": field, "message": message})

    def raise_if_any(self):
        if self.errors:
            raise ValidationError(self.errors)


def _required_text(data, key, errors, message, max_length=None):
    value = data.get(key)
    # 빈 문자열만 거부, 공백 문자열은 그대로 저장
    if not isinstance(value, str) or value == "":
        errors.add(key, message)
        return None
    if max_length is not None and len(value) > max_length:
        errors.add(key, f"长度不能超过{max_length}字符")
        return None
    return value


def _optional_text(data, key, errors, max_length=None):
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        errors.add(key, "必须是字符串")
        return None
    if max_length is not None and len(value) > max_length:
        errors.add(key, f"长度不能超过{max_length}字符")
        return None
    return value


def _positive_int(value):
    """1 이상의 정수 또는 None. bool 과 소수는 거부."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, str) and re.fullmatch(r"\s*\d+\s*", value):
        number = int(value)
        return number if number >= 1 else None
    return None


def _enum(data, key, choices, errors, required=False):
    value = data.get(key)
    if value is None:
        if required:
            errors.add(key, "不能为空")
        return None
    if value not in choices:
        errors.add(key, f"必须是以下之一: {', '.join(choices)}")
        return None
    return value


def _inquiry_fields(data, errors):
    """생성/전체수정 공통 필드"""
    fields = {
        "customer_name": _required_text(data, "customerName", errors, "客户姓名不能为空", MAX_NAME_LENGTH),
        "customer_phone": _required_text(data, "customerPhone", errors, "联系电话不能为空"),
        "customer_email": _optional_text(data, "customerEmail", errors),
        "company": _optional_text(data, "company", errors, MAX_COMPANY_LENGTH),
        "product_name": _required_text(data, "productName", errors, "产品名称不能为空", MAX_PRODUCT_LENGTH),
        "requirements": _required_text(data, "requirements", errors, "需求描述不能为空"),
    }
    if fields["customer_email"] and not EMAIL_PATTERN.fullmatch(fields["customer_email"]):
        errors.add("customerEmail", "邮箱格式不正确")

    quantity = _positive_int(data.get("quantity"))
    if quantity is None:
        errors.add("quantity", "数量必须大于0")
    fields["quantity"] = quantity
    return fields


def _require_object(data):
    if not isinstance(data, dict):
        raise ValidationError([{"field": "body", "message": "请求体必须是JSON对象"}])


def validate_create(data):
    _require_object(data)
    errors = _Collector()
    fields = _inquiry_fields(data, errors)
    fields["urgency"] = _enum(data, "urgency", URGENCIES, errors)
    errors.raise_if_any()
    return fields


def validate_replace(data):
    """전체 수정: 필수 필드 + 제공된 경우에만 덮어쓰는 선택 필드"""
    _require_object(data)
    errors = _Collector()
    fields = _inquiry_fields(data, errors)
    optional = {}
    if "urgency" in data:
        optional["urgency"] = _enum(data, "urgency", URGENCIES, errors, required=True)
    if "status" in data:
        optional["status"] = _enum(data, "status", STATUSES, errors, required=True)
    for key, attr in REPLACE_OPTIONAL_FIELDS:
        if key in data:
            if not isinstance(data[key], str):
                errors.add(key, "必须是字符串")
            optional[attr] = data[key]
    errors.raise_if_any()
    return fields, optional


def validate_status_patch(data):
    """상태 변경: status 필수, 키가 존재하는 선택 필드만 반환 (빈 문자열 포함)"""
    _require_object(data)
    errors = _Collector()
    status = _enum(data, "status", STATUSES, errors, required=True)
    optional = {}
    for key, attr in STATUS_OPTIONAL_FIELDS:
        if key in data:
            if not isinstance(data[key], str):
                errors.add(key, "必须是字符串")
            optional[attr] = data[key]
    errors.raise_if_any()
    return status, optional


def _int_arg(args, key, default, errors, minimum, maximum=None):
    raw = args.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        errors.add(key, "必须是整数")
        return default
    if value < minimum or (maximum is not None and value > maximum):
        bound = f"{minimum}-{maximum}" if maximum is not None else f">= {minimum}"
        errors.add(key, f"取值范围 {bound}")
        return default
    return value


def validate_list_query(args, default_limit=DEFAULT_PAGE_SIZE, max_limit=MAX_PAGE_SIZE):
    errors = _Collector()
    query = {
        "page": _int_arg(args, "page", 1, errors, 1),
        "limit": _int_arg(args, "limit", default_limit, errors, 1, max_limit),
        "status": _enum(args, "status", STATUSES, errors) if args.get("status") else None,
        "urgency": _enum(args, "urgency", URGENCIES, errors) if args.get("urgency") else None,
        "search": (args.get("search") or "").strip() or None,
        "sort_by": args.get("sortBy") or "createdAt",
        "sort_order": args.get("sortOrder") or "desc",
    }
    if query["sort_by"] not in SORT_ACCESSORS:
        errors.add("sortBy", f"必须是以下之一: {', '.join(SORT_ACCESSORS)}")
    if query["sort_order"] not in SORT_ORDERS:
        errors.add("sortOrder", "必须是 asc 或 desc")
    errors.raise_if_any()
    return query


def validate_batch(data):
    """일괄 작업. action 값 자체의 허용 여부는 저장소가 판단한다."""
    _require_object(data)
    errors = _Collector()
    action = data.get("action")
    if not isinstance(action, str) or not action:
        errors.add("action", "不能为空")
    ids = data.get("ids")
    if not isinstance(ids, list) or not ids:
        errors.add("ids", "必须是非空数组")
        ids = []
    elif not all(isinstance(i, str) for i in ids):
        errors.add("ids", "每个ID必须是字符串")
    status = _enum(data, "status", STATUSES, errors)
    errors.raise_if_any()
    return action, ids, status


def validate_export_query(args):
    errors = _Collector()
    status = _enum(args, "status", STATUSES, errors) if args.get("status") else None
    bounds = {}
    for key in ("startDate", "endDate"):
        raw = args.get(key)
        bounds[key] = None
        if raw:
            try:
                bounds[key] = parse_iso(raw)
            except ValueError:
                errors.add(key, "必须是ISO8601日期格式")
    errors.raise_if_any()
    return status, bounds["startDate"], bounds["endDate"]
