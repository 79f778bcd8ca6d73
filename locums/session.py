"""
Authentication session for the marketplace API.

Sessions are immutable values handed to whoever needs them. A SessionManager
performs the network calls and returns a new session from login, refresh and
invalidate; nothing is cached at module level.

This is the client-side entry point used by the UI layer to talk to the auth
API. The calculations service itself is stateless and does not import it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx

from .config import AUTH_API_URL

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 10


class AuthenticationError(Exception):
    """Login or session validation against the auth API failed"""


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str
    type: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "AuthUser":
        try:
            return cls(
                id=str(payload["id"]),
                email=payload["email"],
                type=payload.get("type") or payload.get("role") or "staff",
                first_name=payload.get("firstName"),
                last_name=payload.get("lastName"),
                name=payload.get("name"),
            )
        except (KeyError, TypeError) as e:
            raise AuthenticationError(f"Malformed user payload: {e}") from e


@dataclass(frozen=True)
class AuthSession:
    token: Optional[str] = None
    user: Optional[AuthUser] = None
    refreshed_at: Optional[datetime] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    @classmethod
    def anonymous(cls) -> "AuthSession":
        return cls()


def _valid_token(token) -> bool:
    return isinstance(token, str) and len(token) > MIN_TOKEN_LENGTH


def _json_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError as e:
        raise AuthenticationError("Authentication service returned an invalid response") from e
    if not isinstance(body, dict):
        raise AuthenticationError("Authentication service returned an invalid response")
    return body


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("detail") or f"HTTP {response.status_code}"
    return f"HTTP {response.status_code}"


class SessionManager:
    """Performs auth API calls and hands back new AuthSession values"""

    def __init__(self, base_url: str = AUTH_API_URL, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=10.0)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def login(self, email: str, password: str) -> AuthSession:
        """
        Exchange credentials for a session.

        Raises:
            AuthenticationError: On rejected credentials or an unusable token
        """
        try:
            response = await self.client.post(
                f"{self.base_url}/api/auth/login", json={"email": email, "password": password}
            )
        except httpx.HTTPError as e:
            logger.error(f"❌ Login request failed: {e}")
            raise AuthenticationError("Unable to reach authentication service") from e

        if response.status_code != 200:
            message = _error_message(response)
            logger.warning(f"⚠️ Login rejected for {email}: {message}")
            raise AuthenticationError(message)

        data = _json_body(response)
        token = data.get("token")
        if not _valid_token(token):
            logger.error("❌ Login returned an invalid token")
            raise AuthenticationError("Authentication failed - invalid token received")

        user = AuthUser.from_payload(data.get("user") or {})
        logger.info(f"✅ Logged in {user.email}")
        return AuthSession(token=token, user=user, refreshed_at=datetime.now(timezone.utc))

    async def refresh(self, session: AuthSession) -> AuthSession:
        """
        Re-validate a session against the API.

        A 401 means the token is no longer accepted and an anonymous session is
        returned. Any other failure raises AuthenticationError and leaves the
        caller's session untouched.
        """
        if not session.token:
            return AuthSession.anonymous()

        try:
            response = await self.client.get(f"{self.base_url}/api/auth/me", headers=session.headers)
        except httpx.HTTPError as e:
            logger.error(f"❌ Session refresh failed: {e}")
            raise AuthenticationError("Unable to reach authentication service") from e

        if response.status_code == 401:
            logger.info("ℹ️ Session token rejected, invalidating")
            return AuthSession.anonymous()
        if response.status_code != 200:
            message = _error_message(response)
            logger.error(f"❌ Session refresh returned {response.status_code}: {message}")
            raise AuthenticationError(message)

        payload = _json_body(response)
        user = AuthUser.from_payload(payload.get("user", payload))
        return AuthSession(token=session.token, user=user, refreshed_at=datetime.now(timezone.utc))

    async def invalidate(self, session: AuthSession) -> AuthSession:
        """Log out. The server call is best-effort; the returned session is always anonymous."""
        if session.token:
            try:
                await self.client.post(f"{self.base_url}/api/auth/logout", headers=session.headers)
            except httpx.HTTPError as e:
                logger.warning(f"⚠️ Logout request failed, discarding session locally: {e}")
        return AuthSession.anonymous()
