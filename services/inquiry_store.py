"""JSON 파일 기반 문의(询价) 저장소.

모든 쓰기 작업은 파일 전체를 읽고 → 메모리에서 수정하고 → 파일 전체를 다시 쓴다.
저장소마다 하나의 Lock 으로 읽기-수정-쓰기 구간을 직렬화하므로 같은 프로세스의
스레드 사이에서는 갱신이 유실되지 않는다. 여러 프로세스가 같은 파일을 공유하면
여전히 마지막 쓰기가 이긴다.

쓰기는 같은 디렉터리의 임시 파일에 먼저 기록한 뒤 os.replace 로 교체하므로,
실패해도 기존 파일이 잘린 채로 남지 않는다.

읽기 실패(파일 손상 등)는 로그만 남기고 빈 목록으로 처리한다. 문서는 정상이지만
개별 레코드 형식이 깨진 경우 그 레코드만 건너뛰고, 쓰기 시 원본 그대로 다시 기록한다.
"""
import json
import logging
import math
import os
import tempfile
import threading

from models.inquiry import (
    INITIAL_STATUS,
    DEFAULT_URGENCY,
    SORT_ACCESSORS,
    STATUSES,
    Inquiry,
    generate_id,
    generate_inquiry_number,
    parse_iso,
    utc_now_iso,
)
from services.csv_export import render_inquiries_csv
from services.errors import InvalidArgumentError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

BATCH_ACTIONS = ("delete", "updateStatus")


def status_counts(inquiries):
    """전체 건수 + 상태별 건수 (키는 소문자 상태명)"""
    counts = {"total": len(inquiries)}
    for status in STATUSES:
        counts[status.lower()] = 0
    for inquiry in inquiries:
        key = inquiry.status.lower()
        if key in counts:
            counts[key] += 1
    return counts


def _matches_search(inquiry, search):
    lowered = search.lower()
    for value in (
        inquiry.customer_name,
        inquiry.company,
        inquiry.product_name,
        inquiry.inquiry_number,
        inquiry.customer_email,
    ):
        if value and lowered in value.lower():
            return True
    # 전화번호는 원문 그대로 비교
    return bool(inquiry.customer_phone and search in inquiry.customer_phone)


class InquiryStore:
    def __init__(self, path):
        self.path = path
        self._lock = threading.Lock()
        self._ensure_file()

    # ── 파일 입출력 ──

    def _ensure_file(self):
        directory = os.path.dirname(self.path)
        try:
            if directory and not os.path.exists(directory):
                os.makedirs(directory)
            if not os.path.exists(self.path):
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump({"inquiries": []}, f)
                logger.info("Created empty inquiry store at %s", self.path)
        except OSError as exc:
            logger.error("Failed to initialise inquiry store %s: %s", self.path, exc)

    def _load(self):
        """(읽은 문의 목록, 형식이 깨진 원본 레코드 목록). 깨진 레코드는 건너뛰고 다음 쓰기에 그대로 보존한다."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
            records = document.get("inquiries") or []
            if not isinstance(records, list):
                raise TypeError("inquiries must be a list")
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.error("读取询价数据失败 (%s): %s", self.path, exc)
            return [], []

        inquiries, unreadable = [], []
        for position, record in enumerate(records):
            try:
                inquiries.append(Inquiry.from_dict(record))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping malformed inquiry record #%d in %s: %s", position, self.path, exc)
                unreadable.append(record)
        return inquiries, unreadable

    def _read(self):
        return self._load()[0]

    def _write(self, inquiries, unreadable=()):
        """임시 파일에 쓴 뒤 os.replace 로 교체. 실패하면 기존 파일은 그대로 남는다."""
        payload = {"inquiries": [inquiry.to_dict() for inquiry in inquiries] + list(unreadable)}
        directory = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=directory, prefix=".inquiries-", suffix=".tmp", delete=False
            ) as tmp:
                tmp_path = tmp.name
                json.dump(payload, tmp, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("写入询价数据失败 (%s): %s", self.path, exc, exc_info=True)
            self._discard(tmp_path)
            raise PersistenceError() from exc

    @staticmethod
    def _discard(tmp_path):
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError as exc:
                logger.warning("Failed to remove temp file %s: %s", tmp_path, exc)

    @staticmethod
    def _index_of(inquiries, inquiry_id):
        for index, inquiry in enumerate(inquiries):
            if inquiry.id == inquiry_id:
                return index
        raise NotFoundError()

    # ── 조회 ──

    def all(self):
        return self._read()

    def stats(self):
        return status_counts(self._read())

    def list(self, status=None, urgency=None, search=None, sort_by="createdAt",
             sort_order="desc", page=1, limit=10):
        everything = self._read()
        inquiries = everything

        if status:
            inquiries = [i for i in inquiries if i.status == status]
        if urgency:
            inquiries = [i for i in inquiries if i.urgency == urgency]
        if search:
            inquiries = [i for i in inquiries if _matches_search(i, search)]

        # 안정 정렬: 동일 키는 저장 순서를 유지한다
        accessor = SORT_ACCESSORS[sort_by]
        inquiries = sorted(inquiries, key=accessor, reverse=(sort_order == "desc"))

        total = len(inquiries)
        skip = (page - 1) * limit
        page_items = inquiries[skip:skip + limit]

        return {
            "inquiries": [i.to_dict() for i in page_items],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
            "stats": status_counts(everything),
        }

    def get(self, inquiry_id):
        inquiries = self._read()
        return inquiries[self._index_of(inquiries, inquiry_id)]

    # ── 변경 ──

    def create(self, fields):
        """검증된 필드(속성명 키)로 새 문의 생성. 상태는 항상 PENDING."""
        with self._lock:
            inquiries, unreadable = self._load()
            now = utc_now_iso()
            inquiry = Inquiry(
                id=generate_id(),
                inquiry_number=generate_inquiry_number(i.inquiry_number for i in inquiries),
                customer_name=fields["customer_name"],
                customer_phone=fields["customer_phone"],
                customer_email=fields.get("customer_email"),
                company=fields.get("company"),
                product_name=fields["product_name"],
                quantity=fields["quantity"],
                requirements=fields["requirements"],
                urgency=fields.get("urgency") or DEFAULT_URGENCY,
                status=INITIAL_STATUS,
                created_at=now,
                updated_at=now,
            )
            inquiries.append(inquiry)
            self._write(inquiries, unreadable)
        logger.info("Inquiry %s created (%s)", inquiry.inquiry_number, inquiry.id)
        return inquiry

    def update_status(self, inquiry_id, status, **optional):
        """status 는 항상 덮어쓰고, notes/quoted_price/admin_reply 는 전달된 경우만 덮어쓴다."""
        with self._lock:
            inquiries, unreadable = self._load()
            inquiry = inquiries[self._index_of(inquiries, inquiry_id)]
            old_status = inquiry.status
            now = utc_now_iso()
            inquiry.status = status
            inquiry.updated_at = now
            if "notes" in optional:
                inquiry.notes = optional["notes"]
            if "quoted_price" in optional:
                inquiry.quoted_price = optional["quoted_price"]
            if "admin_reply" in optional:
                inquiry.admin_reply = optional["admin_reply"]
                inquiry.replied_at = now
            self._write(inquiries, unreadable)
        logger.info("Inquiry %s status: %s -> %s", inquiry_id, old_status, status)
        return inquiry

    def replace(self, inquiry_id, fields, optional=None):
        optional = optional or {}
        with self._lock:
            inquiries, unreadable = self._load()
            inquiry = inquiries[self._index_of(inquiries, inquiry_id)]
            inquiry.customer_name = fields["customer_name"]
            inquiry.customer_phone = fields["customer_phone"]
            inquiry.customer_email = fields.get("customer_email")
            inquiry.company = fields.get("company")
            inquiry.product_name = fields["product_name"]
            inquiry.quantity = fields["quantity"]
            inquiry.requirements = fields["requirements"]
            inquiry.updated_at = utc_now_iso()
            for attr in ("urgency", "status", "quoted_price", "notes"):
                if attr in optional:
                    setattr(inquiry, attr, optional[attr])
            self._write(inquiries, unreadable)
        logger.info("Inquiry %s updated", inquiry_id)
        return inquiry

    def delete(self, inquiry_id):
        with self._lock:
            inquiries, unreadable = self._load()
            removed = inquiries.pop(self._index_of(inquiries, inquiry_id))
            self._write(inquiries, unreadable)
        logger.info("Inquiry %s deleted", removed.inquiry_number)
        return removed

    def batch(self, action, ids, status=None):
        """일괄 삭제/상태 변경. 존재하지 않는 ID 는 무시하고 실제 처리 건수를 반환."""
        if action not in BATCH_ACTIONS or (action == "updateStatus" and not status):
            raise InvalidArgumentError()

        wanted = set(ids)
        with self._lock:
            inquiries, unreadable = self._load()
            if action == "delete":
                kept = [i for i in inquiries if i.id not in wanted]
                affected = len(inquiries) - len(kept)
                self._write(kept, unreadable)
            else:
                now = utc_now_iso()
                affected = 0
                for inquiry in inquiries:
                    if inquiry.id in wanted:
                        inquiry.status = status
                        inquiry.updated_at = now
                        affected += 1
                self._write(inquiries, unreadable)
        logger.info("Batch %s: %d of %d requested inquiries affected", action, affected, len(ids))
        return affected

    # ── 내보내기 ──

    def export_csv(self, status=None, start_date=None, end_date=None):
        """상태/생성일 범위 필터 후 CSV 텍스트 (BOM 포함). 저장 순서 유지."""
        inquiries = self._read()
        if status:
            inquiries = [i for i in inquiries if i.status == status]
        if start_date or end_date:
            selected = []
            for inquiry in inquiries:
                created = parse_iso(inquiry.created_at)
                if start_date and created < start_date:
                    continue
                if end_date and created > end_date:
                    continue
                selected.append(inquiry)
            inquiries = selected
        return render_inquiries_csv(inquiries)
