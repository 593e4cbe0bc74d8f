from fastapi.testclient import TestClient
import pytest

from app.core.config import Settings
from app.main import create_app


@pytest.fixture
def bare_app(tmp_path):
    # Without the static mount, routes added by a test are reachable
    return create_app(Settings(UPLOAD_DIR=str(tmp_path), SERVE_UPLOADS_STATIC=False))


def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"


def test_404_without_static_mount(bare_app):
    response = TestClient(bare_app).get("/non-existent-route")
    assert response.status_code == 404
    assert response.json()["code"] == "HTTP_ERROR"


def test_validation_error_structure(bare_app):
    from pydantic import BaseModel

    class Item(BaseModel):
        name: str
        price: int

    @bare_app.post("/test-validation")
    def create_item(item: Item):
        return item

    response = TestClient(bare_app).post("/test-validation", json={"name": "foo", "price": "invalid"})
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "details" in data
    assert len(data["details"]) > 0


def test_application_error_is_plain_text(bare_app):
    from app.core.exceptions import PersistenceError

    @bare_app.get("/test-custom-error")
    def trigger_custom_error():
        raise PersistenceError(message="Database unavailable")

    response = TestClient(bare_app).get("/test-custom-error")
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Error occurred: Database unavailable"


def test_unhandled_exception(bare_app):
    @bare_app.get("/test-crash")
    def crash():
        raise RuntimeError("boom")

    response = TestClient(bare_app, raise_server_exceptions=False).get("/test-crash")
    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "INTERNAL_ERROR"
    assert data["error"] == "boom"


def test_unhandled_exception_hidden_in_production(tmp_path):
    app = create_app(Settings(
        UPLOAD_DIR=str(tmp_path),
        SERVE_UPLOADS_STATIC=False,
        ENVIRONMENT="production",
    ))

    @app.get("/test-crash")
    def crash():
        raise RuntimeError("secret detail")

    response = TestClient(app, raise_server_exceptions=False).get("/test-crash")
    assert response.status_code == 500
    assert "secret detail" not in response.text


def test_process_time_header(client):
    response = client.get("/")
    assert "x-process-time" in response.headers


def test_liveness(client):
    assert client.get("/live").json() == {"status": "alive"}


def test_health_reports_unavailable_database(client):
    response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["checks"]["database"] == "unhealthy"
