from fastapi.testclient import TestClient


def _get_client() -> TestClient:
    from sleepcoach.main import app

    return TestClient(app)


def test_health_endpoint_returns_ok() -> None:
    client = _get_client()
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ping_returns_greeting() -> None:
    response = _get_client().get("/api/ping")

    assert response.status_code == 200
    assert response.json() == {"message": "Hello from the Luna sleep coach API!"}


def test_request_id_generated_and_returned() -> None:
    client = _get_client()
    response = client.get("/health")

    assert response.headers.get("X-Request-Id")


def test_request_id_echoed_from_header() -> None:
    client = _get_client()
    req_id = "test-request-id-123"
    response = client.get("/api/ping", headers={"X-Request-Id": req_id})

    assert response.headers.get("X-Request-Id") == req_id
