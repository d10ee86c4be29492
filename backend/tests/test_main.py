# tests/test_main.py
from fastapi.testclient import TestClient

from flipbook.config import settings
from flipbook.main import create_app
from flipbook.services.pages import PageService


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_health_reports_store_failure(client, store, monkeypatch):
    def broken_ping():
        raise RuntimeError("connection refused")

    monkeypatch.setattr(store, "ping", broken_ping)

    response = client.get("/api/health")
    assert response.status_code == 500
    assert response.json() == {"ok": False}


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_malformed_json_is_rejected_as_bad_request(client, sample_page):
    response = client.put(
        f"/api/pages/{sample_page.id}",
        content=b"{not json",
        headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_unhandled_error_returns_generic_message(app, monkeypatch):
    def explode(self):
        raise RuntimeError("secret connection details")

    monkeypatch.setattr(PageService, "list", explode)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/pages")

    assert response.status_code == 500
    assert response.json() == {"error": "internal server error"}
    assert "secret" not in response.text


def test_app_opens_and_closes_its_own_store(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite:///{tmp_path / 'flipbook.db'}")
    app = create_app()

    with TestClient(app) as client:
        assert app.state.store is not None
        response = client.get("/api/pages")
        assert [p["title"] for p in response.json()] == ["Page 1", "Page 2", "Page 3", "The End"]

    assert app.state.store is None
