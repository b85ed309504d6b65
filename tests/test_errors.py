import pytest
from fastapi.testclient import TestClient

from storefront.data.database import Base, engine
from storefront.services.theme_service import ThemeService


@pytest.fixture
def lenient_client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    Base.metadata.drop_all(bind=engine)


def test_unexpected_error_is_generic_500(lenient_client, monkeypatch, caplog):
    def boom(self):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(ThemeService, "get_theme", boom)

    resp = lenient_client.get("/theme")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    assert "secret internals" not in resp.text
    assert "Unhandled error on GET /theme" in caplog.text


def test_unknown_route_uses_error_body(client):
    resp = client.get("/no-such-route")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}
