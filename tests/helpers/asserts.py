from typing import Optional, Dict, Any
from fastapi.testclient import TestClient


def api_call(client: TestClient, method: str, path: str, headers: Optional[Dict[str, str]] = None,
             json: Optional[Any] = None, params: Optional[Dict[str, Any]] = None,
             expected_min: int = 200, expected_max: int = 300):
    """Send a request and fail loudly with the body when the status is out of range."""
    response = client.request(method, path, headers=headers, json=json, params=params)
    ok = expected_min <= response.status_code < expected_max
    try:
        body = response.json()
    except ValueError:
        body = response.text
    assert ok, f"{method} {path} => {response.status_code}, body={body}, json={json}"
    return response


def data_of(response) -> Any:
    return response.json()["data"]


def assert_error(response, status_code: int, code: str):
    assert response.status_code == status_code, response.text
    assert response.json()["error"]["code"] == code, response.text
