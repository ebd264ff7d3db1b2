"""CSV 내보내기 헬퍼 (스프레드시트 호환을 위해 UTF-8 BOM 포함)"""
from datetime import date

CSV_BOM = "\ufeff"
CSV_COLUMNS = [
    ("inquiryNumber", "询价单号"),
    ("customerName", "客户姓名"),
    ("customerPhone", "联系电话"),
    ("customerEmail", "邮箱"),
    ("company", "公司"),
    ("productName", "产品名称"),
    ("quantity", "数量"),
    ("requirements", "需求描述"),
    ("urgency", "紧急程度"),
    ("status", "状态"),
    ("quotedPrice", "报价金额"),
    ("createdAt", "创建时间"),
    ("updatedAt", "更新时间"),
]
CSV_HEADER = ",".join(label for _, label in CSV_COLUMNS)


def _quote(value):
    return '"' + value.replace('"', '""') + '"'


def _csv_row(inquiry):
    # 需求描述 필드만 따옴표 처리
    return ",".join([
        inquiry.inquiry_number,
        inquiry.customer_name,
        inquiry.customer_phone,
        inquiry.customer_email or "",
        inquiry.company or "",
        inquiry.product_name,
        str(inquiry.quantity),
        _quote(inquiry.requirements),
        inquiry.urgency,
        inquiry.status,
        inquiry.quoted_price or "",
        inquiry.created_at,
        inquiry.updated_at,
    ])


def render_inquiries_csv(inquiries):
    rows = "\n".join(_csv_row(inquiry) for inquiry in inquiries)
    return CSV_BOM + CSV_HEADER + "\n" + rows


def export_filename(today=None):
    today = today or date.today()
    return f"inquiries_{today.isoformat()}.csv"
