"""
询价 샘플 데이터 입력 스크립트
저장소가 비어 있을 때만 샘플 문의를 추가합니다. (--force 로 강제 추가)
사용법: python scripts/seed_inquiries.py [--force]
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app
from routes.utils import get_store

SAMPLE_INQUIRIES = [
    {
        "customer_name": "张先生",
        "customer_phone": "13800138001",
        "customer_email": "zhang@example.com",
        "company": "广西装饰工程有限公司",
        "product_name": "施小雅-SU7系列 圣玛丽胡桃",
        "quantity": 500,
        "requirements": "需要18mm厚度，E0级环保标准，用于高端住宅项目",
        "urgency": "URGENT",
        "status": "PROCESSING",
        "quoted_price": "¥134,000",
        "notes": "客户要求加急处理，已联系生产部门",
    },
    {
        "customer_name": "李女士",
        "customer_phone": "13900139002",
        "customer_email": "li@example.com",
        "company": "柳州家具制造厂",
        "product_name": "SU7-经典橡木",
        "quantity": 300,
        "requirements": "用于办公家具生产，需要提供样品",
        "urgency": "NORMAL",
        "status": "QUOTED",
        "quoted_price": "¥74,400",
        "notes": "已发送报价单和样品",
    },
    {
        "customer_name": "王总",
        "customer_phone": "13700137003",
        "customer_email": "wang@example.com",
        "company": "南宁建材贸易公司",
        "product_name": "E0级生态板",
        "quantity": 1000,
        "requirements": "批量采购，希望获得优惠价格",
        "urgency": "FLEXIBLE",
        "status": "PENDING",
    },
]

WORKFLOW_KEYS = ("status", "quoted_price", "notes")


def main():
    parser = argparse.ArgumentParser(description="Seed sample inquiries")
    parser.add_argument("--force", action="store_true", help="append even if the store is not empty")
    args = parser.parse_args()

    with app.app_context():
        store = get_store()
        if store.all() and not args.force:
            print("询价数据已存在，跳过 (use --force to append)")
            return

        for sample in SAMPLE_INQUIRIES:
            fields = {k: v for k, v in sample.items() if k not in WORKFLOW_KEYS}
            inquiry = store.create(fields)
            workflow = {k: sample[k] for k in ("quoted_price", "notes") if k in sample}
            if sample["status"] != inquiry.status or workflow:
                store.update_status(inquiry.id, sample["status"], **workflow)
            print(f"✅ {inquiry.inquiry_number} {inquiry.customer_name}")

    print(f"共创建 {len(SAMPLE_INQUIRIES)} 条询价数据")


if __name__ == "__main__":
    main()
