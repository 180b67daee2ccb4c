import pytest
from fastapi.testclient import TestClient

from estate.config import Settings
from estate.core.errors import error_handler
from estate.main import create_app


def test_root_and_health_without_database(client):
    root = client.get("/")
    assert root.status_code == 200
    assert root.json()["status"] == "operational"

    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["database"] == "memory"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"success": False, "statusCode": 404, "message": "Not Found"}


def test_missing_secret_key_is_fatal():
    with pytest.raises(RuntimeError, match="SECRET_KEY"):
        create_app(Settings(SECRET_KEY=""))


@pytest.mark.parametrize(
    "debug, message",
    [(False, "Internal Server Error"), (True, "database exploded")],
)
def test_unhandled_errors_are_enveloped(debug, message):
    app = create_app(Settings(SECRET_KEY="k", DEBUG=debug))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    @app.get("/teapot")
    async def teapot():
        raise error_handler(418, "I'm a teapot")

    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/boom")
    assert response.status_code == 500
    assert response.json() == {"success": False, "statusCode": 500, "message": message}

    response = client.get("/teapot")
    assert response.status_code == 418
    assert response.json()["message"] == "I'm a teapot"
