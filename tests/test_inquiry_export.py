"""CSV 내보내기 테스트"""
from datetime import date

from conftest import make_record, write_records
from services.csv_export import CSV_BOM, CSV_HEADER, export_filename

EXPECTED_HEADER = "询价单号,客户姓名,联系电话,邮箱,公司,产品名称,数量,需求描述,紧急程度,状态,报价金额,创建时间,更新时间"


def _login(client):
    with client.session_transaction() as sess:
        sess["is_admin"] = True


def _lines(resp):
    text = resp.data.decode("utf-8")
    assert text.startswith(CSV_BOM)
    return text[len(CSV_BOM):].split("\n")


def test_header_labels():
    assert CSV_HEADER == EXPECTED_HEADER


def test_export_filename_uses_date():
    assert export_filename(date(2026, 3, 7)) == "inquiries_2026-03-07.csv"


def test_export_requires_admin(client, flask_app):
    resp = client.get("/api/inquiries/export/csv")
    assert resp.status_code == 401


def test_export_response_headers(client, flask_app, store):
    write_records(store, [make_record(1)])
    _login(client)

    resp = client.get("/api/inquiries/export/csv")

    assert resp.status_code == 200
    assert resp.headers["Content-Type"] == "text/csv; charset=utf-8"
    disposition = resp.headers["Content-Disposition"]
    assert disposition.startswith("attachment;")
    assert "inquiries_" in disposition and disposition.endswith('.csv"')


def test_export_row_format(client, flask_app, store):
    write_records(store, [make_record(
        1,
        customerName="张先生",
        customerEmail="zhang@example.com",
        requirements='需要"E0级"板材',
        quotedPrice="¥134000",
    )])
    _login(client)

    lines = _lines(client.get("/api/inquiries/export/csv"))

    assert lines[0] == EXPECTED_HEADER
    assert lines[1] == (
        "INQ-20260101-000001,张先生,13800130001,zhang@example.com,,SU7-经典橡木,10,"
        '"需要""E0级""板材",NORMAL,PENDING,¥134000,'
        "2026-01-01T08:00:00.000Z,2026-01-01T08:00:00.000Z"
    )
    assert len(lines) == 2


def test_export_empty_store_has_header_only(client, flask_app):
    _login(client)
    lines = _lines(client.get("/api/inquiries/export/csv"))
    assert lines == [EXPECTED_HEADER, ""]


def test_export_filters_by_status(client, flask_app, store):
    write_records(store, [
        make_record(1, status="QUOTED"),
        make_record(2, status="PENDING"),
        make_record(3, status="QUOTED"),
    ])
    _login(client)

    lines = _lines(client.get("/api/inquiries/export/csv?status=QUOTED"))

    numbers = [line.split(",")[0] for line in lines[1:]]
    assert numbers == ["INQ-20260101-000001", "INQ-20260101-000003"]


def test_export_filters_by_date_range(client, flask_app, store):
    write_records(store, [make_record(i) for i in range(1, 6)])
    _login(client)

    lines = _lines(client.get(
        "/api/inquiries/export/csv?startDate=2026-01-02T00:00:00Z&endDate=2026-01-04T23:59:59Z"
    ))

    numbers = [line.split(",")[0] for line in lines[1:]]
    assert numbers == ["INQ-20260101-000002", "INQ-20260101-000003", "INQ-20260101-000004"]


def test_export_rejects_bad_date(client, flask_app):
    _login(client)
    resp = client.get("/api/inquiries/export/csv?startDate=yesterday")
    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "startDate"
