"""관리자 전용 엔드포인트 인증 가드 회귀 테스트

공개 접수(POST /api/inquiries)를 제외한 모든 询价/통계 API 가
미로그인 시 JSON 401 을 반환하는지 검증합니다.
"""
import pytest

# (method, url) 형태로 보호되어야 할 엔드포인트 목록
PROTECTED = [
    ("GET",    "/api/inquiries"),
    ("GET",    "/api/inquiries/some-id"),
    ("PATCH",  "/api/inquiries/some-id/status"),
    ("PUT",    "/api/inquiries/some-id"),
    ("DELETE", "/api/inquiries/some-id"),
    ("POST",   "/api/inquiries/batch"),
    ("GET",    "/api/inquiries/export/csv"),
    ("GET",    "/api/stats/dashboard"),
    ("GET",    "/api/stats/inquiry-trends"),
    ("GET",    "/api/auth/me"),
]


@pytest.mark.parametrize("method,url", PROTECTED)
def test_unauthenticated_returns_401(client, flask_app, method, url):
    """비로그인 상태에서 보호된 엔드포인트 접근 시 401"""
    resp = client.open(url, method=method, json={"status": "QUOTED"})

    assert resp.status_code == 401, f"{method} {url} → {resp.status_code}"
    body = resp.get_json()
    assert body["success"] is False
    assert body["message"] == "访问令牌缺失，请先登录"


def test_unauthenticated_mutation_leaves_store_untouched(client, flask_app, store):
    from conftest import make_record, write_records

    write_records(store, [make_record(1)])
    client.delete("/api/inquiries/id-1")
    client.post("/api/inquiries/batch", json={"action": "delete", "ids": ["id-1"]})

    assert [i.id for i in store.all()] == ["id-1"]
