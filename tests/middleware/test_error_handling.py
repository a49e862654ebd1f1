from datetime import datetime, timedelta

from app.core.config import settings
from app.core.constants import RoleEnum
from app.schemas.response import ErrorDetail, ErrorResponse
from app.services.user import user_service
from tests.helpers.asserts import assert_error


def _explode(*args, **kwargs):
    raise RuntimeError("database exploded")


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.headers["X-Request-ID"] == "abc-123"


def test_request_id_is_generated(client):
    response = client.get("/health")
    assert response.headers.get("X-Request-ID")


def test_error_body_shape(client):
    response = client.get("/courses/", headers={"X-Request-ID": "req-1"})
    body = response.json()
    assert response.status_code == 401
    assert set(body) == {"error", "timestamp", "path", "request_id"}
    assert body["path"] == "/courses/"
    assert body["request_id"] == "req-1"


def test_unknown_route_uses_error_envelope(client):
    assert_error(client.get("/no-such-route"), 404, "NOT_FOUND")


def test_missing_token_sets_authenticate_header(client):
    response = client.get("/auth/me")
    assert_error(response, 401, "UNAUTHORIZED")
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_unexpected_error_is_500_with_details_outside_production(client, user_factory, auth_headers, monkeypatch):
    tutor = user_factory(RoleEnum.TUTOR)
    monkeypatch.setattr(user_service, "list_students", _explode)

    response = client.get("/users/students", headers=auth_headers(tutor))

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "INTERNAL_SERVER_ERROR"
    assert error["message"] == "An unexpected error occurred"
    assert error["details"] == {"error_type": "RuntimeError"}


def test_unexpected_error_hides_details_in_production(client, user_factory, auth_headers, monkeypatch):
    tutor = user_factory(RoleEnum.TUTOR)
    monkeypatch.setattr(user_service, "list_students", _explode)
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    response = client.get("/users/students", headers=auth_headers(tutor))

    assert response.status_code == 500
    assert response.json()["error"]["details"] is None
    assert "exploded" not in response.text


def test_error_timestamp_is_utc_iso8601(client):
    body = client.get("/courses/").json()
    stamped = datetime.fromisoformat(body["timestamp"])
    assert stamped.utcoffset() == timedelta(0)


def test_error_response_build_stamps_path_and_request_id():
    rendered = ErrorResponse.build(ErrorDetail(code="CONFLICT", message="taken"), path="/auth/register", request_id="r-9")
    assert rendered.path == "/auth/register"
    assert rendered.request_id == "r-9"
    assert rendered.error.details is None
    assert rendered.timestamp
