import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

URGENCIES = ("URGENT", "NORMAL", "FLEXIBLE")
STATUSES = ("PENDING", "PROCESSING", "QUOTED", "COMPLETED", "CANCELLED")
DEFAULT_URGENCY = "NORMAL"
INITIAL_STATUS = "PENDING"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 문자열 (밀리초, Z 접미사): 사전순 == 시간순"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    """ISO-8601 문자열을 aware datetime 으로 변환. 시간대 없는 값은 UTC 로 간주."""
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_ID_ALPHABET[rem])
    return "".join(reversed(digits)) or "0"


def generate_id() -> str:
    """시간 기반 base36 접두사 + 랜덤 접미사"""
    suffix = "".join(random.choices(_ID_ALPHABET, k=11))
    return _to_base36(int(time.time() * 1000)) + suffix


def generate_inquiry_number(existing=(), now: Optional[datetime] = None) -> str:
    """INQ-YYYYMMDD-NNNNNN 형식. NNNNNN 은 밀리초 타임스탬프 하위 6자리.

    같은 번호가 이미 있으면 접미사를 1씩 올린다.
    """
    now = now or datetime.now()
    date_part = now.strftime("%Y%m%d")
    suffix = int(now.timestamp() * 1000) % 1_000_000
    taken = set(existing)
    number = f"INQ-{date_part}-{suffix:06d}"
    while number in taken:
        suffix += 1
        number = f"INQ-{date_part}-{suffix:06d}"
    return number


@dataclass
class Inquiry:
    id: str
    inquiry_number: str
    customer_name: str
    customer_phone: str
    product_name: str
    quantity: int
    requirements: str
    created_at: str
    updated_at: str
    urgency: str = DEFAULT_URGENCY
    status: str = INITIAL_STATUS
    customer_email: Optional[str] = None
    company: Optional[str] = None
    quoted_price: Optional[str] = None
    notes: Optional[str] = None
    admin_reply: Optional[str] = None
    replied_at: Optional[str] = None
    # FIELD_MAP 에 없는 저장 키: 그대로 보존해 다시 기록한다
    extra: dict = field(default_factory=dict, repr=False, compare=False)

    # (JSON 키, 속성명): 저장/응답 순서 고정
    FIELD_MAP = (
        ("id", "id"),
        ("inquiryNumber", "inquiry_number"),
        ("customerName", "customer_name"),
        ("customerPhone", "customer_phone"),
        ("customerEmail", "customer_email"),
        ("company", "company"),
        ("productName", "product_name"),
        ("quantity", "quantity"),
        ("requirements", "requirements"),
        ("urgency", "urgency"),
        ("status", "status"),
        ("quotedPrice", "quoted_price"),
        ("notes", "notes"),
        ("adminReply", "admin_reply"),
        ("repliedAt", "replied_at"),
        ("createdAt", "created_at"),
        ("updatedAt", "updated_at"),
    )

    @classmethod
    def from_dict(cls, data: dict) -> "Inquiry":
        """저장 레코드 -> Inquiry. 형식이 맞지 않으면 ValueError/TypeError."""
        if not isinstance(data, dict):
            raise TypeError(f"inquiry record must be an object, got {type(data).__name__}")
        _check_record(data)
        known = {key for key, _ in cls.FIELD_MAP}
        kwargs = {attr: data[key] for key, attr in cls.FIELD_MAP if key in data}
        kwargs["extra"] = {key: value for key, value in data.items() if key not in known}
        return cls(**kwargs)

    def to_dict(self) -> dict:
        result = {}
        for key, attr in self.FIELD_MAP:
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        for key, value in self.extra.items():
            result.setdefault(key, value)
        return result


REQUIRED_TEXT_KEYS = (
    "id", "inquiryNumber", "customerName", "customerPhone",
    "productName", "requirements", "createdAt", "updatedAt",
)
OPTIONAL_TEXT_KEYS = ("customerEmail", "company", "quotedPrice", "notes", "adminReply", "repliedAt")


def _check_record(data):
    for key in REQUIRED_TEXT_KEYS:
        if not isinstance(data.get(key), str):
            raise ValueError(f"{key} missing or not a string")
    for key in OPTIONAL_TEXT_KEYS:
        if data.get(key) is not None and not isinstance(data[key], str):
            raise ValueError(f"{key} is not a string")
    quantity = data.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValueError("quantity is not an integer")
    if data.get("status", INITIAL_STATUS) not in STATUSES:
        raise ValueError(f"unknown status {data.get('status')!r}")
    if data.get("urgency", DEFAULT_URGENCY) not in URGENCIES:
        raise ValueError(f"unknown urgency {data.get('urgency')!r}")
    parse_iso(data["createdAt"])
    parse_iso(data["updatedAt"])


# 정렬 가능한 필드 → 접근자
SORT_ACCESSORS = {
    "createdAt": lambda inquiry: inquiry.created_at,
    "updatedAt": lambda inquiry: inquiry.updated_at,
    "customerName": lambda inquiry: inquiry.customer_name or "",
    "status": lambda inquiry: inquiry.status,
}
SORT_ORDERS = ("asc", "desc")
