"""HTTP access to the Meal Mate backend.

``ApiClient`` wraps an ``httpx.AsyncClient``: it attaches the stored bearer
token to each request, turns transport failures and error statuses into
``ApiError`` subclasses, and on a 401 clears the stored session and calls the
registered ``on_auth_expired`` callback.
"""
import logging
from typing import Any, Callable, Optional

import httpx

from mealmate.infra.Session_Storage import SessionStorage
from mealmate.utilities.config import API_BASE_URL, HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(ApiError):
    """The server could not be reached."""


class RequestTimeoutError(NetworkError):
    pass


class AuthExpiredError(ApiError):
    """The server rejected the stored token (HTTP 401)."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return f"Request failed with status code {response.status_code}"


class ApiClient:
    def __init__(self, base_url: str = API_BASE_URL, storage: Optional[SessionStorage] = None,
                 timeout: float = HTTP_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 on_auth_expired: Optional[Callable[[], None]] = None):
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self.on_auth_expired = on_auth_expired
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth_headers(self) -> dict:
        token = self.storage.get_token() if self.storage else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _handle_auth_expired(self) -> None:
        logger.info("Server rejected the stored token, clearing session")
        if self.storage:
            self.storage.clear_auth()
        if self.on_auth_expired:
            self.on_auth_expired()

    async def request(self, method: str, path: str, *, params: Optional[dict] = None,
                      json: Any = None, auth: bool = True) -> Any:
        """Send one request and return the decoded JSON body (``None`` when empty).

        ``auth=False`` sends no token and skips 401 handling (login/signup).
        """
        headers = self._auth_headers() if auth else {}
        try:
            response = await self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out", method, path)
            raise RequestTimeoutError("Connection timeout - please check your network connection") from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(f"Network error - cannot reach server at {self.base_url}") from e

        if response.status_code == 401 and auth:
            self._handle_auth_expired()
            raise AuthExpiredError(_error_message(response), 401)
        if response.is_error:
            raise ApiError(_error_message(response), response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Server returned an invalid JSON body", response.status_code) from e

    async def get(self, path: str, params: Optional[dict] = None, **kwargs) -> Any:
        return await self.request("GET", path, params=params, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return await self.request("PUT", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.request("DELETE", path, **kwargs)
