"""Staff auth service: token exchange and current-user lookup.

Both calls go to the CMS API root (BACKEND_AUTH_URL), not the custom
order namespace. The http client is owned by the app lifespan.
"""

import logging
from typing import Any

import httpx

from src.ta_common.errors import (
    BackendRejectedError,
    BackendUnavailableError,
    InvalidCredentialsError,
    NotAuthenticatedError,
)
from src.ta_gateway.auth.credentials import StaffCredentials
from src.ta_gateway.user.schemas import StaffUser
from src.ta_order.infrastructure.backend_client import extract_error_message

logger = logging.getLogger("ta.backend")

TOKEN_PATH = "/jwt-auth/v1/token"
CURRENT_USER_PATH = "/wp/v2/users/me"


def _user_from_payload(data: dict[str, Any]) -> StaffUser:
    roles = data.get("roles") or []
    username = str(data.get("username") or data.get("name") or "")
    return StaffUser(
        id=int(data.get("id") or 0),
        username=username,
        name=str(data.get("name") or username),
        role=str(roles[0]) if roles else "subscriber",
    )


class StaffAuthService:
    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.TimeoutException:
            logger.error("%s %s timed out", method, path)
            raise BackendUnavailableError("request timed out") from None
        except httpx.HTTPError as exc:
            logger.error("%s %s transport error: %s", method, path, exc)
            raise BackendUnavailableError("connection failed") from exc

    async def login(self, username: str, password: str) -> tuple[str, StaffUser]:
        """Exchange username/password for a backend JWT, then load the user.

        Any 4xx from the token endpoint is reported as InvalidCredentialsError,
        carrying the backend's message when it sent one.
        """
        resp = await self._send(
            "POST", TOKEN_PATH, json={"username": username, "password": password}
        )
        if resp.is_client_error:
            logger.info("Login rejected for %s (%d)", username, resp.status_code)
            raise InvalidCredentialsError(extract_error_message(resp.text) or "Invalid username or password")
        if not resp.is_success:
            logger.error("POST %s → %d: %s", TOKEN_PATH, resp.status_code, resp.text)
            raise BackendRejectedError(resp.status_code, extract_error_message(resp.text))

        try:
            token = resp.json().get("token")
        except (ValueError, AttributeError):
            token = None
        if not token:
            raise BackendUnavailableError("token response has no token")

        user = await self.current_user(StaffCredentials(str(token)))
        logger.info("Staff %s logged in", user.username)
        return str(token), user

    async def current_user(self, credentials: StaffCredentials) -> StaffUser:
        resp = await self._send("GET", CURRENT_USER_PATH, headers=credentials.auth_headers())
        if resp.status_code in (401, 403):
            raise NotAuthenticatedError(extract_error_message(resp.text) or "Session rejected")
        if not resp.is_success:
            logger.error("GET %s → %d: %s", CURRENT_USER_PATH, resp.status_code, resp.text)
            raise BackendRejectedError(resp.status_code, extract_error_message(resp.text))
        try:
            data = resp.json()
        except ValueError:
            raise BackendUnavailableError("unreadable JSON response") from None
        if not isinstance(data, dict):
            raise BackendUnavailableError("expected a JSON object")
        return _user_from_payload(data)
