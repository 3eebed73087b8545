"""HTTP client for the station API. Credentials are injected per request, never set globally."""
import logging
import os
from collections.abc import Callable
from typing import Any

import httpx

LOG = logging.getLogger(__name__)

DEFAULT_API_URL = os.environ.get("API_URL", "http://localhost:5000/api")


class ApiError(Exception):
    """Non-2xx response or transport failure. `message` is the server's message when it sent one."""

    def __init__(
        self,
        status_code: int | None,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message or f"Request failed ({status_code or 'no response'})")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return ApiError(response.status_code)
    return ApiError(response.status_code, body.get("message"), body.get("errors"))


class ApiClient:
    """Thin wrapper over httpx.Client. `token_provider` is consulted on every call."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token_provider: Callable[[], str | None] | None = None,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.token_provider = token_provider or (lambda: None)
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def _auth_headers(self) -> dict[str, str]:
        token = self.token_provider()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request; return decoded JSON (None for empty bodies) or raise ApiError."""
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = self._http.request(method, path, json=json, params=params, headers=self._auth_headers())
        except httpx.RequestError as e:
            LOG.warning("%s %s failed: %s", method, path, e)
            raise ApiError(None) from e
        if response.is_error:
            raise _error_from_response(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Auth

    def login(self, email: str, password: str) -> dict:
        return self.request("POST", "/auth/login", json={"email": email, "password": password})

    def register(self, name: str, email: str, password: str) -> dict:
        return self.request("POST", "/auth/register", json={"name": name, "email": email, "password": password})

    def me(self) -> dict:
        return self.request("GET", "/auth/me")

    # Stations

    def list_stations(self, status: str | None = None, connector_type: str | None = None) -> list[dict]:
        return self.request("GET", "/stations", params={"status": status, "connectorType": connector_type})

    def get_station(self, station_id: str) -> dict:
        return self.request("GET", f"/stations/{station_id}")

    def create_station(self, data: dict) -> dict:
        return self.request("POST", "/stations", json=data)

    def update_station(self, station_id: str, data: dict) -> dict:
        return self.request("PUT", f"/stations/{station_id}", json=data)

    def delete_station(self, station_id: str) -> None:
        self.request("DELETE", f"/stations/{station_id}")

    def dashboard(self) -> dict:
        return self.request("GET", "/dashboard")
