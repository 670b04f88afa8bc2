"""
Job Board API Client

Thin httpx wrapper over the REST API:
- query(path): GET, cached per path
- mutate(method, path, body): write, returns the updated record

Mutations never touch the cache. The caller decides which cached views a
write made stale and calls invalidate() for exactly those paths, e.g.

    client.mutate("PUT", "/api/admin/jobs/7/status", {"status": "closed"})
    client.invalidate("/api/admin/flagged-jobs", "/api/admin/stats")

Errors come back as the same exceptions the server raises, so a field
error from the API can be shown next to the right input.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from jobboard.core.errors import (
    AuthenticationError, ConflictError, ForbiddenError, NotFoundError,
    PayloadValidationError, TransportError,
)
from jobboard.core.validation import FieldError

logger = logging.getLogger(__name__)


class QueryCache:
    """Responses keyed by request path. Nothing expires on its own."""

    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def get(self, path: str) -> Any:
        return self._entries.get(path)

    def set(self, path: str, value: Any) -> None:
        self._entries[path] = value

    def invalidate(self, *paths: str) -> None:
        for path in paths:
            self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class JobBoardClient:
    """
    Client for the job board REST API.

    Usage:
        client = JobBoardClient("http://localhost:8000")
        client.login("jane", "secret123")
        jobs = client.query("/api/jobs?search=python")
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.http = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)
        self.cache = QueryCache()
        self.token = token

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, body: Any = None) -> Any:
        try:
            response = self.http.request(method, path, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise TransportError(str(exc)) from exc

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

        raise self._error_for(response)

    def _error_for(self, response: httpx.Response) -> Exception:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        message = data.get("message") or response.text or response.reason_phrase
        status = response.status_code

        if status == 400 and data.get("errors"):
            return PayloadValidationError([FieldError(**e) for e in data["errors"]])
        if status == 400:
            return ConflictError(message)
        if status == 401:
            return AuthenticationError(message)
        if status == 403:
            return ForbiddenError(message)
        if status == 404:
            return NotFoundError(message.replace(" not found", ""))
        logger.error("Unexpected %s from %s: %s", status, response.request.url, message)
        return TransportError(message, status_code=status)

    # ============================================================
    # QUERIES / MUTATIONS
    # ============================================================

    def query(self, path: str, refresh: bool = False) -> Any:
        """GET `path`, serving a cached copy unless `refresh` is set."""
        if not refresh and path in self.cache:
            return self.cache.get(path)
        data = self._request("GET", path)
        self.cache.set(path, data)
        return data

    def mutate(self, method: str, path: str, body: Any = None) -> Any:
        """Send a write and return the updated record."""
        return self._request(method.upper(), path, body)

    def invalidate(self, *paths: str) -> None:
        self.cache.invalidate(*paths)

    # ============================================================
    # AUTH
    # ============================================================

    def login(self, username: str, password: str) -> Dict[str, Any]:
        data = self.mutate("POST", "/api/auth/login", {"username": username, "password": password})
        self.token = data["accessToken"]
        self.cache.clear()
        return data["user"]

    def register(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        data = self.mutate("POST", "/api/auth/register", payload)
        self.token = data["accessToken"]
        self.cache.clear()
        return data["user"]

    def logout(self) -> None:
        self.token = None
        self.cache.clear()

    def close(self) -> None:
        self.http.close()
