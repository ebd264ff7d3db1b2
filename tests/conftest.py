import json
import os
from pathlib import Path

import pytest

# Configure a dedicated data directory for tests before importing the Flask app.
TEST_DATA_DIR = Path(__file__).resolve().parent / "pytest_data"
os.environ["FLASK_ENV"] = "testing"
os.environ["SECRET_KEY"] = "test_secret_key"
os.environ["ADMIN_PASSWORD"] = "test_admin_password"
os.environ["DATA_DIR"] = TEST_DATA_DIR.as_posix()
os.environ["INQUIRIES_FILE"] = (TEST_DATA_DIR / "inquiries.json").as_posix()
os.environ["REDIS_URL"] = ""

from app import app as _flask_app
from routes.utils import STORE_EXTENSION_KEY
from services.cache_service import EXTENSION_KEY as CACHE_EXTENSION_KEY, ResponseCache
from services.inquiry_store import InquiryStore


@pytest.fixture
def store(tmp_path):
    return InquiryStore(str(tmp_path / "data" / "inquiries.json"))


@pytest.fixture
def cache():
    return ResponseCache(None)


@pytest.fixture
def flask_app(store, cache):
    _flask_app.config["TESTING"] = True
    _flask_app.config["WTF_CSRF_ENABLED"] = False

    saved_store = _flask_app.extensions[STORE_EXTENSION_KEY]
    saved_cache = _flask_app.extensions[CACHE_EXTENSION_KEY]
    _flask_app.extensions[STORE_EXTENSION_KEY] = store
    _flask_app.extensions[CACHE_EXTENSION_KEY] = cache

    with _flask_app.app_context():
        yield _flask_app

    _flask_app.extensions[STORE_EXTENSION_KEY] = saved_store
    _flask_app.extensions[CACHE_EXTENSION_KEY] = saved_cache


@pytest.fixture
def client(flask_app):
    with flask_app.test_client() as client:
        yield client


def make_record(index, **overrides):
    """저장 파일에 직접 넣을 문의 레코드 (생성 시각은 index 순으로 증가)"""
    record = {
        "id": f"id-{index}",
        "inquiryNumber": f"INQ-20260101-{index:06d}",
        "customerName": f"客户{index}",
        "customerPhone": f"1380013{index:04d}",
        "productName": "SU7-经典橡木",
        "quantity": 10 * index,
        "requirements": "需要样品",
        "urgency": "NORMAL",
        "status": "PENDING",
        "createdAt": f"2026-01-{index:02d}T08:00:00.000Z",
        "updatedAt": f"2026-01-{index:02d}T08:00:00.000Z",
    }
    record.update(overrides)
    return record


def write_records(store, records):
    with open(store.path, "w", encoding="utf-8") as f:
        json.dump({"inquiries": records}, f, ensure_ascii=False)
