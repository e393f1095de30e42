"""Async session client implementing the generated API client's auth contract.

The Axios client written into new projects follows a small protocol:

* every request carries credentials (cookies, or a bearer token read from
  storage);
* a 401 triggers at most one token refresh per call chain, followed by one
  retry of the original request;
* a failed refresh, or a 401 on the retry, clears local tokens, redirects to
  the login route and raises a session-expired error;
* 402 is reported as a quota warning and otherwise handled like any error;
* everything else surfaces as an error carrying a ``message``.

``SessionClient`` is the same protocol on top of ``httpx`` so it can be
exercised from Python (and used against the same backends).  The refresh
flag lives on a ``RequestContext`` created per call, never on the client.

Typical usage::

    async with SessionClient("http://localhost:3000/api", AuthStorage.LOCAL_STORAGE) as api:
        api.tokens.access_token = "..."
        api.tokens.refresh_token = "..."
        profile = await api.get("/user/profile")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import httpx

from .answers import AuthStorage
from .utils import print_warning

SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."
DEFAULT_ERROR_MESSAGE = (
    "Something went wrong. Please check your internet connection or contact support."
)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ApiError(Exception):
    """Normalised API failure: always carries a human-readable ``message``."""

    def __init__(self, message: str, status: int | None = None, code: str | None = None) -> None:
        self.message = message
        self.status = status
        self.code = code
        super().__init__(message)


class SessionExpiredError(ApiError):
    """Raised after a failed token refresh; the caller must log in again."""

    def __init__(self) -> None:
        super().__init__(SESSION_EXPIRED_MESSAGE, status=401, code="SESSION_EXPIRED")


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass
class RequestContext:
    """Refresh bookkeeping for one call chain."""

    has_tried_refresh: bool = False


@dataclass
class TokenStore:
    """Client-side token storage (the ``localStorage`` strategy)."""

    access_token: str | None = None
    refresh_token: str | None = None

    def clear(self) -> None:
        self.access_token = None
        self.refresh_token = None


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class SessionClient:
    """Async HTTP client with single-shot token refresh.

    Args:
        base_url: API root, e.g. ``http://localhost:3000/api``.
        storage: Cookie (server-managed httpOnly cookies) or localStorage
            (tokens held in ``tokens`` and sent as a bearer header).
        refresh_path: Endpoint that issues new tokens.
        login_route: Where a failed session redirects to.
        on_redirect: Called with *login_route* on session expiry.  Defaults
            to recording the route in ``redirects``.
        transport: Optional ``httpx`` transport (``httpx.MockTransport`` in tests).
        cookies: Initial cookies for the cookie strategy.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        storage: AuthStorage,
        *,
        refresh_path: str = "/auth/refresh",
        login_route: str = "/login",
        on_redirect: Callable[[str], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        cookies: dict[str, str] | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self.refresh_path = refresh_path
        self.login_route = login_route
        self.tokens = TokenStore()
        self.redirects: list[str] = []
        self._on_redirect = on_redirect or self.redirects.append
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            cookies=cookies,
            timeout=httpx.Timeout(timeout, connect=10.0),
        )

    async def __aenter__(self) -> "SessionClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        context: RequestContext | None = None,
    ) -> Any:
        """Send a request, refreshing the session once on 401.

        Raises:
            SessionExpiredError: If the refresh or the retried request fails
                with 401.
            ApiError: For every other failure.
        """
        context = context or RequestContext()
        try:
            return await self._send(method, url, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            if not _is_unauthorized(exc) or context.has_tried_refresh or not self.has_refresh_token():
                raise self._to_api_error(exc) from exc

        context.has_tried_refresh = True
        refreshed = False
        try:
            await self._refresh()
            refreshed = True
            return await self._send(method, url, params=params, json=json, headers=headers)
        except (httpx.HTTPError, ApiError) as exc:
            if not refreshed or _is_unauthorized(exc):
                self._expire_session()
                raise SessionExpiredError() from exc
            raise self._to_api_error(exc) from exc
        finally:
            context.has_tried_refresh = False

    async def get(self, url: str, **kwargs: Any) -> Any:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> Any:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> Any:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", url, **kwargs)

    async def optimistic_update(
        self,
        url: str,
        updated: dict[str, Any],
        current: dict[str, Any],
        set_local: Callable[[dict[str, Any]], None],
    ) -> bool:
        """Apply *updated* locally, PUT it, and roll back to *current* on failure.

        Returns:
            ``True`` if the write succeeded.
        """
        set_local(updated)
        try:
            await self.put(url, json=updated)
        except ApiError as exc:
            set_local(current)
            print_warning(f"Optimistic update rolled back: {exc.message}")
            return False
        return True

    def has_refresh_token(self) -> bool:
        """Whether a refresh can be attempted at all."""
        if self.storage is AuthStorage.COOKIE:
            return "refreshToken" in self._client.cookies
        return bool(self.tokens.refresh_token)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None,
        json: Any,
        headers: dict[str, str] | None,
    ) -> Any:
        request_headers = {"Content-Type": "application/json"}
        if self.storage is AuthStorage.LOCAL_STORAGE and self.tokens.access_token:
            request_headers["Authorization"] = f"Bearer {self.tokens.access_token}"
        request_headers.update(headers or {})

        response = await self._client.request(
            method, url, params=params, json=json, headers=request_headers
        )
        response.raise_for_status()
        return _decode(response)

    async def _refresh(self) -> None:
        if self.storage is AuthStorage.COOKIE:
            response = await self._client.post(self.refresh_path, json={})
            response.raise_for_status()
            return

        if not self.tokens.refresh_token:
            raise ApiError("No refresh token found", status=401)
        response = await self._client.post(
            self.refresh_path, json={"refreshToken": self.tokens.refresh_token}
        )
        response.raise_for_status()
        body = _decode(response)
        data = body.get("data") if isinstance(body, dict) else None
        if isinstance(data, dict):
            if data.get("accessToken"):
                self.tokens.access_token = data["accessToken"]
            if data.get("refreshToken"):
                self.tokens.refresh_token = data["refreshToken"]

    def _expire_session(self) -> None:
        if self.storage is AuthStorage.LOCAL_STORAGE:
            self.tokens.clear()
        self._on_redirect(self.login_route)

    @staticmethod
    def _to_api_error(exc: Exception) -> ApiError:
        if isinstance(exc, ApiError):
            return exc
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status == 402:
                print_warning("402 - Organization is out of tokens")
            body = _decode(exc.response)
            message = body.get("message") if isinstance(body, dict) else None
            return ApiError(message or "Unknown API error", status=status)
        return ApiError(DEFAULT_ERROR_MESSAGE, status=503, code="INTERNAL_ERROR")


def _is_unauthorized(exc: Exception) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code == 401
    return isinstance(exc, ApiError) and exc.status == 401


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
