"""
HTTP wrapper around the DevConnector JSON API.

Every non-2xx response is raised as ``APIError`` carrying the server's
``detail`` and, for validation failures, its ``errors`` list.
"""

from typing import Any

import httpx

from devconnector.logging import get_logger

logger = get_logger("client.api")

DEFAULT_BASE_URL = "http://localhost:5000"


class APIError(Exception):
    """Error response from the API."""

    def __init__(self, status_code: int, detail: str, errors: list[dict[str, str]] | None = None):
        self.status_code = status_code
        self.detail = detail
        self.errors = errors or []
        super().__init__(f"{status_code}: {detail}")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        detail = body.get("detail") or response.reason_phrase or "Request failed"
        return cls(response.status_code, str(detail), body.get("errors"))

    @property
    def messages(self) -> list[str]:
        """Field messages when present, otherwise the single detail message."""
        if self.errors:
            return [error.get("message", "") for error in self.errors]
        return [self.detail]


class DevConnectorAPI:
    """
    Thin synchronous client.

    Usage:
        with DevConnectorAPI("http://localhost:5000") as api:
            token = api.post("/api/auth", {"email": ..., "password": ...})["token"]
            api.set_token(token)
            me = api.get("/api/auth")

    ``client`` may be any ``httpx.Client`` (tests pass a FastAPI TestClient).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self.token = token

    def set_token(self, token: str | None) -> None:
        self.token = token

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = self._client.request(method, path, json=json, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning("api_request_failed", method=method, path=path, error=str(e))
            raise APIError(0, f"Could not reach server: {e}") from e

        if response.status_code >= 400:
            logger.debug("api_error_response", method=method, path=path, status=response.status_code)
            raise APIError.from_response(response)
        return response.json()

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "DevConnectorAPI":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
