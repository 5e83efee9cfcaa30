"""
Auth module — obtains the bearer credential the push channel requires.

Email + password registration or login. The returned token is stored on the
shared HttpClient.
"""

from typing import Any

from linka_harness.errors import ApiError, AuthRejected
from linka_harness.transport.http import HttpClient


class Auth:
    def __init__(self, http: HttpClient):
        self._http = http

    async def register(self, email: str, password: str) -> dict[str, Any]:
        """Create a user. Returns {token, refreshToken, user: {id, email}}."""
        try:
            result = await self._http.post("/register", {"email": email, "password": password}, authenticated=False)
        except ApiError as e:
            raise AuthRejected(f"Registration failed: {e}", details={"status": e.status}) from e
        self._http.set_token(result["token"])
        return result

    async def login(self, email: str, password: str) -> dict[str, Any]:
        try:
            result = await self._http.post("/login", {"email": email, "password": password}, authenticated=False)
        except ApiError as e:
            raise AuthRejected(f"Login failed: {e}", details={"status": e.status}) from e
        self._http.set_token(result["token"])
        return result

    async def profile(self) -> dict[str, Any]:
        return await self._http.get("/profile")
