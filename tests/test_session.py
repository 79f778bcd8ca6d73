import asyncio
import json

import httpx
import pytest

from locums.session import AuthenticationError, AuthSession, AuthUser, SessionManager

TOKEN = "eyJhbGciOiJIUzI1NiJ9.session"
USER = {"id": 42, "email": "locum@example.com", "type": "staff", "firstName": "Sam", "lastName": "Lee"}


def _manager(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SessionManager(base_url="http://auth.test/", client=client)


def _session():
    return AuthSession(token=TOKEN, user=AuthUser.from_payload(USER))


def test_login_returns_new_session():
    def handler(request):
        assert request.url.path == "/api/auth/login"
        assert json.loads(request.content) == {"email": "locum@example.com", "password": "secret"}
        return httpx.Response(200, json={"token": TOKEN, "user": USER})

    session = asyncio.run(_manager(handler).login("locum@example.com", "secret"))
    assert session.is_authenticated
    assert session.user.id == "42"
    assert session.user.first_name == "Sam"
    assert session.headers == {"Authorization": f"Bearer {TOKEN}"}
    assert session.refreshed_at is not None


def test_login_rejects_short_token():
    def handler(request):
        return httpx.Response(200, json={"token": "short", "user": USER})

    with pytest.raises(AuthenticationError):
        asyncio.run(_manager(handler).login("locum@example.com", "secret"))


def test_login_surfaces_server_message():
    def handler(request):
        return httpx.Response(401, json={"message": "Invalid credentials"})

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        asyncio.run(_manager(handler).login("locum@example.com", "wrong"))


def test_refresh_keeps_token():
    def handler(request):
        assert request.headers["Authorization"] == f"Bearer {TOKEN}"
        return httpx.Response(200, json={"user": {**USER, "email": "new@example.com"}})

    before = _session()
    refreshed = asyncio.run(_manager(handler).refresh(before))
    assert refreshed.token == TOKEN
    assert refreshed.user.email == "new@example.com"
    assert before.user.email == "locum@example.com"


def test_refresh_unauthorized_is_anonymous():
    def handler(request):
        return httpx.Response(401, json={"detail": "expired"})

    refreshed = asyncio.run(_manager(handler).refresh(_session()))
    assert refreshed == AuthSession.anonymous()
    assert not refreshed.is_authenticated


def test_refresh_server_error_raises():
    def handler(request):
        return httpx.Response(500, text="boom")

    with pytest.raises(AuthenticationError, match="HTTP 500"):
        asyncio.run(_manager(handler).refresh(_session()))


def test_refresh_without_token_skips_network():
    def handler(request):
        raise AssertionError("no request expected")

    assert asyncio.run(_manager(handler).refresh(AuthSession.anonymous())) == AuthSession.anonymous()


def test_invalidate_is_best_effort():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        raise httpx.ConnectError("offline", request=request)

    session = asyncio.run(_manager(handler).invalidate(_session()))
    assert calls == ["/api/auth/logout"]
    assert session == AuthSession.anonymous()
