# church_admin/client.py
"""
Thin HTTP client and in-memory stores for the admin API.

`ApiClient` wraps a `requests.Session` (or anything with a requests-style
`request(method, url, ...)`, such as FastAPI's TestClient). `ResourceStore`
keeps the list/detail state one dashboard table needs; `build_stores` wires one
store per collection endpoint.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.body = body


class ApiClient:
    def __init__(self, base_url: str = "", session: Any = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.token: Optional[str] = None

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json_body: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        r = self.session.request(
            method,
            url,
            params=params,
            json=json_body,
            headers=self._headers(),
            timeout=self.timeout,
        )
        try:
            body = r.json()
        except ValueError:
            body = r.text
        if r.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            logger.debug("%s %s -> %s", method, path, r.status_code)
            raise ApiError(r.status_code, message or f"Request failed ({r.status_code})", body)
        return body

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json_body: Any = None) -> Any:
        return self.request("POST", path, json_body=json_body)

    def put(self, path: str, json_body: Any = None) -> Any:
        return self.request("PUT", path, json_body=json_body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    # ---- auth ----

    def login(self, email: str, password: str) -> Dict[str, Any]:
        body = self.post("/auth/login", {"email": email, "password": password})
        self.token = body.get("token")
        return body

    def logout(self) -> Dict[str, Any]:
        try:
            return self.post("/auth/logout")
        finally:
            self.token = None

    def session_info(self) -> Dict[str, Any]:
        return self.get("/auth/session")


@dataclass
class ResourceStore:
    """List + detail state for one collection endpoint."""

    client: ApiClient
    path: str

    items: List[Dict[str, Any]] = field(default_factory=list)
    current: Optional[Dict[str, Any]] = None
    total: int = 0
    page: int = 1
    page_size: int = 10
    total_pages: int = 0
    filters: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    is_loading: bool = False
    is_creating: bool = False
    is_updating: bool = False
    is_deleting: bool = False

    def _fail(self, exc: Exception, fallback: str) -> None:
        self.error = exc.message if isinstance(exc, ApiError) else (str(exc) or fallback)
        self.is_loading = self.is_creating = self.is_updating = self.is_deleting = False

    def fetch(self, page: int = 1, page_size: Optional[int] = None, **filters: Any) -> List[Dict[str, Any]]:
        if filters:
            self.filters.update(filters)
        size = page_size or self.page_size
        params = {"page": page, "pageSize": size}
        params.update({k: v for k, v in self.filters.items() if v is not None and v != ""})

        self.is_loading, self.error = True, None
        try:
            body = self.client.get(self.path, params=params)
        except (ApiError, requests.RequestException) as exc:
            self._fail(exc, "Failed to fetch")
            raise
        self.items = body["data"]
        self.total = body["total"]
        self.page = body["page"]
        self.page_size = body["pageSize"]
        self.total_pages = body["totalPages"]
        self.is_loading = False
        return self.items

    def get(self, item_id: int) -> Dict[str, Any]:
        self.is_loading, self.error = True, None
        try:
            self.current = self.client.get(f"{self.path}/{item_id}")
        except (ApiError, requests.RequestException) as exc:
            self._fail(exc, "Failed to load")
            raise
        self.is_loading = False
        return self.current

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.is_creating, self.error = True, None
        try:
            created = self.client.post(self.path, payload)
        except (ApiError, requests.RequestException) as exc:
            self._fail(exc, "Failed to create")
            raise
        self.items = [created, *self.items]
        self.total += 1
        self.current = created
        self.is_creating = False
        return created

    def update(self, item_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.is_updating, self.error = True, None
        try:
            updated = self.client.put(f"{self.path}/{item_id}", payload)
        except (ApiError, requests.RequestException) as exc:
            self._fail(exc, "Failed to update")
            raise
        self.items = [updated if it.get("id") == item_id else it for it in self.items]
        if self.current and self.current.get("id") == item_id:
            self.current = updated
        self.is_updating = False
        return updated

    def delete(self, item_id: int) -> Dict[str, Any]:
        self.is_deleting, self.error = True, None
        try:
            body = self.client.delete(f"{self.path}/{item_id}")
        except (ApiError, requests.RequestException) as exc:
            self._fail(exc, "Failed to delete")
            raise
        before = len(self.items)
        self.items = [it for it in self.items if it.get("id") != item_id]
        self.total = max(0, self.total - (before - len(self.items)))
        if self.current and self.current.get("id") == item_id:
            self.current = None
        self.is_deleting = False
        return body

    def set_filters(self, **filters: Any) -> None:
        self.filters.update(filters)

    def reset_filters(self) -> None:
        self.filters = {}

    def reset(self) -> None:
        self.items = []
        self.current = None
        self.total = 0
        self.page = 1
        self.page_size = 10
        self.total_pages = 0
        self.filters = {}
        self.error = None
        self.is_loading = self.is_creating = self.is_updating = self.is_deleting = False


@dataclass
class AuthStore:
    client: ApiClient
    current_user: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    is_loading: bool = False
    is_logging_in: bool = False
    is_logging_out: bool = False

    def login(self, email: str, password: str) -> Dict[str, Any]:
        self.is_logging_in, self.error = True, None
        try:
            body = self.client.login(email, password)
        except (ApiError, requests.RequestException) as exc:
            self.error = exc.message if isinstance(exc, ApiError) else "Login failed"
            self.is_logging_in = False
            raise
        self.current_user = body["user"]
        self.is_logging_in = False
        return self.current_user

    def logout(self) -> None:
        self.is_logging_out, self.error = True, None
        try:
            self.client.logout()
        except (ApiError, requests.RequestException) as exc:
            self.error = exc.message if isinstance(exc, ApiError) else "Logout failed"
            raise
        finally:
            self.current_user = None
            self.is_logging_out = False

    def check_session(self) -> Optional[Dict[str, Any]]:
        """Refresh `current_user`; an expired or missing session clears it."""
        self.is_loading, self.error = True, None
        try:
            body = self.client.session_info()
        except ApiError as exc:
            self.current_user = None
            if exc.status_code == 401:
                return None
            self.error = exc.message
            raise
        finally:
            self.is_loading = False
        self.current_user = body["user"]
        return self.current_user

    def reset(self) -> None:
        self.current_user = None
        self.error = None
        self.is_loading = self.is_logging_in = self.is_logging_out = False


def build_stores(client: ApiClient) -> Dict[str, Any]:
    return {
        "auth": AuthStore(client),
        "churches": ResourceStore(client, "/church"),
        "positions": ResourceStore(client, "/positions"),
        "subjects": ResourceStore(client, "/subjects"),
        "users": ResourceStore(client, "/users"),
        "workers": ResourceStore(client, "/users/workers"),
        "admins": ResourceStore(client, "/users/admin"),
    }
