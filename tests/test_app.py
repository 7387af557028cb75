"""Application settings and the catch-all error handler."""

from fastapi.testclient import TestClient

from app.api.deps import get_product_queries
from app.config import Settings, settings
from app.main import app


class ExplodingQueries:
    def list_products(self, page, limit, category_id=None):
        raise RuntimeError("connection to db-admin:s3cret@10.0.0.5 refused")


def test_debug_is_off_unless_enabled(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    assert Settings(_env_file=None).DEBUG is False

    monkeypatch.setenv("DEBUG", "True")
    assert Settings(_env_file=None).DEBUG is True


def test_unhandled_error_hides_details_outside_debug(monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", False)
    app.dependency_overrides[get_product_queries] = lambda: ExplodingQueries()
    try:
        resp = TestClient(app, raise_server_exceptions=False).get("/api/v1/products")
    finally:
        app.dependency_overrides.pop(get_product_queries, None)

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"]["code"] == "SERVER_ERROR"
    assert body["error"]["details"] == "An error occurred"
    assert "s3cret" not in resp.text


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
