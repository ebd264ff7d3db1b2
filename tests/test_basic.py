def test_health(client):
    """헬스 체크 엔드포인트"""
    response = client.get('/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "OK"
    assert data["storage"] is True
    assert data["cache"] is False
    assert data["version"]


def test_404_is_json(client):
    """존재하지 않는 경로는 JSON 404"""
    response = client.get('/non_existent_page')
    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "路由 /non_existent_page 不存在"}


def test_405_is_json(client):
    response = client.put('/api/inquiries')
    assert response.status_code == 405
    assert response.get_json()["success"] is False


def test_security_headers(client):
    response = client.get('/health')
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_chinese_text_not_escaped(client):
    response = client.get('/api/inquiries')
    assert "访问令牌缺失".encode("utf-8") in response.data
