"""관리자 대시보드 통계: 문의 저장소 전체를 대상으로 집계"""
from datetime import datetime, timedelta, timezone

from models.inquiry import URGENCIES, parse_iso
from services.inquiry_store import status_counts

RECENT_DAYS = 7
RECENT_LIMIT = 10
RECENT_FIELDS = (
    "id", "inquiryNumber", "customerName", "customerPhone",
    "productName", "quantity", "urgency", "status", "createdAt",
)


def _created_since(inquiries, since):
    return [i for i in inquiries if parse_iso(i.created_at) >= since]


def dashboard_stats(store, now=None):
    now = now or datetime.now(timezone.utc)
    inquiries = store.all()
    by_status = status_counts(inquiries)

    by_urgency = {urgency.lower(): 0 for urgency in URGENCIES}
    for inquiry in inquiries:
        key = (inquiry.urgency or "").lower()
        if key in by_urgency:
            by_urgency[key] += 1

    recent = _created_since(inquiries, now - timedelta(days=RECENT_DAYS))
    recent.sort(key=lambda i: i.created_at, reverse=True)
    recent_items = []
    for inquiry in recent[:RECENT_LIMIT]:
        data = inquiry.to_dict()
        recent_items.append({key: data.get(key) for key in RECENT_FIELDS})

    return {
        "overview": {
            "totalInquiries": by_status["total"],
            "pendingInquiries": by_status["pending"],
            "quotedInquiries": by_status["quoted"],
            "recentInquiries": len(recent),
        },
        "byStatus": by_status,
        "byUrgency": by_urgency,
        "recentInquiries": recent_items,
    }


def inquiry_trends(store, days=30, now=None):
    """최근 days 일 동안 일별 접수/대기/견적/완료 건수 (날짜 오름차순)"""
    now = now or datetime.now(timezone.utc)
    inquiries = _created_since(store.all(), now - timedelta(days=days))

    trends = {}
    for inquiry in inquiries:
        day = inquiry.created_at[:10]
        bucket = trends.setdefault(day, {"total": 0, "pending": 0, "quoted": 0, "completed": 0})
        bucket["total"] += 1
        key = inquiry.status.lower()
        if key in bucket:
            bucket[key] += 1

    return [{"date": day, **counts} for day, counts in sorted(trends.items())]
