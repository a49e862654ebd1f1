from typing import Any, Dict, Optional

from fastapi.testclient import TestClient


def api_call(
    client: TestClient,
    method: str,
    path: str,
    headers: Optional[Dict[str, str]] = None,
    json: Optional[Dict[str, Any]] = None,
    expected_status: Optional[int] = None,
):
    """Sends a request and fails with the response body when the status is off.

    Without ``expected_status`` any 2xx passes.
    """
    response = client.request(method, path, headers=headers, json=json)
    if expected_status is None:
        ok = 200 <= response.status_code < 300
    else:
        ok = response.status_code == expected_status
    assert ok, f"{method} {path} => {response.status_code}, body={response.text}, json={json}"
    return response


def assert_error(response, status_code: int, code: Optional[str] = None):
    assert response.status_code == status_code, response.text
    error = response.json()["error"]
    if code is not None:
        assert error["code"] == code, error
    return error
