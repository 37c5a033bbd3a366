from app import create_app


def _client():
    app = create_app("TestingConfig")
    return app.test_client()


def test_home_lists_plugins():
    response = _client().get("/")
    assert response.status_code == 200
    data = response.get_json()["data"]
    titles = [item["title"] for item in data["plugins"]]
    assert "Physics Calculator" in titles
    assert response.headers.get("Content-Security-Policy")
    assert response.headers.get("X-Request-ID")


def test_unknown_route_returns_json_envelope():
    response = _client().get("/does-not-exist")
    assert response.status_code == 404
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "not_found"
