"""
Thin REST client for the service under test.
"""

import logging
from typing import Any, Optional

import httpx

from linka_harness.config import DEFAULT_BASE_URL
from linka_harness.errors import ApiError

logger = logging.getLogger(__name__)


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}/api",
            headers={"User-Agent": "linka-harness/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    def _auth_headers(self, authenticated: bool) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if authenticated and self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        if resp.status_code < 400:
            return
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = str(body["error"])
        else:
            message = f"HTTP {resp.status_code}: {resp.text[:200]}"
        logger.debug("%s %s -> %d %s", resp.request.method, resp.request.url, resp.status_code, message)
        raise ApiError(resp.status_code, message, details=body if isinstance(body, dict) else None)

    async def get(self, path: str, authenticated: bool = True) -> Any:
        resp = await self._client.get(path, headers=self._auth_headers(authenticated))
        self._raise_for_status(resp)
        return resp.json()

    async def post(self, path: str, body: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        resp = await self._client.post(path, json=body, headers=self._auth_headers(authenticated))
        self._raise_for_status(resp)
        return resp.json()

    async def put(self, path: str, body: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        resp = await self._client.put(path, json=body, headers=self._auth_headers(authenticated))
        self._raise_for_status(resp)
        return resp.json()

    async def delete(self, path: str, authenticated: bool = True) -> Any:
        resp = await self._client.delete(path, headers=self._auth_headers(authenticated))
        self._raise_for_status(resp)
        return resp.json()

    async def close(self) -> None:
        await self._client.aclose()
