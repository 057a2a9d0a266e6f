# client/api.py
from typing import Any, Optional

import httpx

DEFAULT_API_URL = "http://localhost:5001"


class TrackerApiError(Exception):
    """A request to the tracker API came back with a non-2xx status."""

    def __init__(self, status_code: int, error: str, errors: Optional[list[str]] = None):
        self.status_code = status_code
        self.error = error
        self.errors = errors or []
        detail = f"{error}: {'; '.join(self.errors)}" if self.errors else error
        super().__init__(f"{status_code} {detail}")


class TrackerApi:
    """Thin wrapper over the REST endpoints of the tracker server.

    Pass `client` to reuse an existing httpx.Client (the FastAPI TestClient
    works too); otherwise one is created for `base_url` and closed by `close()`.
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, client: Optional[httpx.Client] = None):
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(
            base_url=base_url,
            headers={"Accept": "application/json"},
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if self._owns_client:
            self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self.client.request(method, path, **kwargs)
        if response.is_success:
            return response.json()
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        raise TrackerApiError(
            response.status_code,
            body.get("error") or response.reason_phrase,
            body.get("errors"),
        )

    def list_applications(self, status: Optional[str] = None, sort: Optional[str] = None) -> list[dict]:
        params = {}
        if status:
            params["status"] = status
        if sort:
            params["sort"] = sort
        return self._request("GET", "/api/applications", params=params)

    def get_application(self, application_id: int) -> dict:
        return self._request("GET", f"/api/applications/{application_id}")

    def create_application(self, fields: dict) -> dict:
        return self._request("POST", "/api/applications", json=fields)

    def update_application(self, application_id: int, fields: dict) -> dict:
        return self._request("PUT", f"/api/applications/{application_id}", json=fields)

    def delete_application(self, application_id: int) -> dict:
        return self._request("DELETE", f"/api/applications/{application_id}")

    def stats(self) -> dict:
        return self._request("GET", "/api/stats")

    def health(self) -> dict:
        return self._request("GET", "/health")
