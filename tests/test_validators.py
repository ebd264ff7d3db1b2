"""요청 검증 함수 테스트"""
import pytest
from werkzeug.datastructures import MultiDict

from services.errors import ValidationError
from services.validators import (
    validate_batch,
    validate_create,
    validate_export_query,
    validate_list_query,
    validate_replace,
    validate_status_patch,
)


def _payload(**overrides):
    data = {
        "customerName": " 张先生 ",
        "customerPhone": "13800138001",
        "productName": "SU7-胡桃",
        "quantity": 500,
        "requirements": "18mm",
    }
    data.update(overrides)
    return data


def _error_fields(exc_info):
    return {e["field"] for e in exc_info.value.errors}


def test_create_keeps_text_as_given():
    fields = validate_create(_payload(quantity="20", customerEmail="", company=""))
    assert fields["customer_name"] == " 张先生 "
    assert fields["quantity"] == 20
    assert fields["customer_email"] is None
    assert fields["company"] is None
    assert fields["urgency"] is None


def test_create_accepts_whitespace_only_text():
    fields = validate_create(_payload(requirements="   "))
    assert fields["requirements"] == "   "


def test_create_rejects_empty_text():
    with pytest.raises(ValidationError) as exc_info:
        validate_create(_payload(requirements=""))
    assert _error_fields(exc_info) == {"requirements"}


@pytest.mark.parametrize("quantity", [0, -1, "abc", 1.5, True, None])
def test_create_rejects_bad_quantity(quantity):
    with pytest.raises(ValidationError) as exc_info:
        validate_create(_payload(quantity=quantity))
    assert _error_fields(exc_info) == {"quantity"}


def test_create_reports_all_errors():
    with pytest.raises(ValidationError) as exc_info:
        validate_create({"customerEmail": "bad"})
    assert _error_fields(exc_info) == {
        "customerName", "customerPhone", "customerEmail",
        "productName", "requirements", "quantity",
    }
    assert exc_info.value.status_code == 400


def test_create_requires_object():
    with pytest.raises(ValidationError) as exc_info:
        validate_create(["not", "a", "dict"])
    assert _error_fields(exc_info) == {"body"}


def test_replace_optional_only_when_present():
    _, optional = validate_replace(_payload())
    assert optional == {}

    _, optional = validate_replace(_payload(status="QUOTED", notes="", quotedPrice="¥1"))
    assert optional == {"status": "QUOTED", "notes": "", "quoted_price": "¥1"}


def test_status_patch_keeps_empty_strings():
    status, optional = validate_status_patch({"status": "CANCELLED", "notes": ""})
    assert status == "CANCELLED"
    assert optional == {"notes": ""}


def test_status_patch_requires_status():
    with pytest.raises(ValidationError) as exc_info:
        validate_status_patch({"notes": "x"})
    assert _error_fields(exc_info) == {"status"}


def test_list_query_defaults():
    query = validate_list_query(MultiDict())
    assert query == {
        "page": 1,
        "limit": 10,
        "status": None,
        "urgency": None,
        "search": None,
        "sort_by": "createdAt",
        "sort_order": "desc",
    }


@pytest.mark.parametrize("args,field", [
    ({"page": "0"}, "page"),
    ({"limit": "101"}, "limit"),
    ({"limit": "ten"}, "limit"),
    ({"urgency": "NOW"}, "urgency"),
    ({"sortOrder": "up"}, "sortOrder"),
])
def test_list_query_rejects(args, field):
    with pytest.raises(ValidationError) as exc_info:
        validate_list_query(MultiDict(args))
    assert _error_fields(exc_info) == {field}


def test_batch_passes_action_through():
    action, ids, status = validate_batch({"action": "archive", "ids": ["a", "b"]})
    assert (action, ids, status) == ("archive", ["a", "b"], None)


def test_batch_rejects_non_string_ids():
    with pytest.raises(ValidationError) as exc_info:
        validate_batch({"action": "delete", "ids": [1, 2]})
    assert _error_fields(exc_info) == {"ids"}


def test_export_query_parses_dates():
    status, start, end = validate_export_query(MultiDict({
        "status": "QUOTED",
        "startDate": "2026-01-01",
        "endDate": "2026-01-31T23:59:59.999Z",
    }))
    assert status == "QUOTED"
    assert start.tzinfo is not None
    assert start < end
