# =============================================================================
# tests/test_auth_isolation.py - Per-Request Auth Client Tests
# =============================================================================
# These run the app against real supabase.Client instances. Only the HTTP
# layer is faked: httpx.HTTPTransport.handle_request is swapped for
# FakeBackend, which answers the GoTrue and PostgREST endpoints the flow uses
# and records every request.
#
# Covered:
# - each login gets its own PKCE verifier, carried in a cookie
# - the callback sends the verifier from its own cookie
# - a completed login never changes the credentials of table requests
# - logout without a bearer token never reaches the backend
# =============================================================================

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.auth.routes import CODE_VERIFIER_COOKIE
from app.config import settings
from app.main import app
from lib.supabase_client import SupabaseClient


class FakeBackend:
    """Stands in for the hosted backend behind every httpx.HTTPTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        path = request.url.path

        if path == "/auth/v1/token":
            code = json.loads(request.content)["auth_code"]
            return httpx.Response(200, json=self._session(code))
        if path == "/auth/v1/logout":
            return httpx.Response(204)
        if path == "/rest/v1/profiles":
            row = json.loads(request.content)
            if isinstance(row, list):
                row = row[0]
            return httpx.Response(201, json=[{**row, "created_at": "2024-01-15T10:00:00Z"}])
        if path == "/rest/v1/posts":
            return httpx.Response(200, json=[])
        return httpx.Response(404, json={"message": f"unexpected {request.method} {path}"})

    @staticmethod
    def _session(code: str) -> dict:
        return {
            "access_token": f"jwt-of-{code}",
            "refresh_token": f"refresh-of-{code}",
            "expires_in": 3600,
            "token_type": "bearer",
            "user": {
                "id": f"user-{code}",
                "aud": "authenticated",
                "email": f"{code}@example.com",
                "app_metadata": {"provider": "github"},
                "user_metadata": {"user_name": code, "avatar_url": None},
                "created_at": "2024-01-15T10:00:00Z",
            },
        }

    def paths(self, prefix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith(prefix)]


@pytest.fixture
def backend(monkeypatch):
    backend = FakeBackend()
    monkeypatch.setattr(httpx.HTTPTransport, "handle_request", backend)
    SupabaseClient.reset()
    yield backend
    SupabaseClient.reset()


@pytest.fixture
def live_client(backend):
    """TestClient with no dependency overrides: real clients, fake HTTP."""
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        yield client
    SupabaseClient.reset()


def _login(client: TestClient) -> httpx.Response:
    client.cookies.clear()
    return client.get("/auth/login", follow_redirects=False)


class TestPerRequestAuthClient:
    def test_each_login_gets_its_own_verifier(self, live_client, backend):
        first = _login(live_client)
        second = _login(live_client)

        assert first.status_code == second.status_code == 307
        assert first.headers["location"].startswith(f"{settings.SUPABASE_URL}/auth/v1/authorize")
        assert "code_challenge=" in first.headers["location"]
        assert first.cookies[CODE_VERIFIER_COOKIE] != second.cookies[CODE_VERIFIER_COOKIE]
        assert backend.requests == []

    def test_callback_sends_verifier_from_its_own_cookie(self, live_client, backend):
        alice_verifier = _login(live_client).cookies[CODE_VERIFIER_COOKIE]
        bob_verifier = _login(live_client).cookies[CODE_VERIFIER_COOKIE]

        live_client.cookies.clear()
        live_client.cookies.set(CODE_VERIFIER_COOKIE, alice_verifier, path="/auth")
        response = live_client.get("/auth/callback?code=alice", follow_redirects=False)

        assert response.status_code == 307
        assert "error" not in response.headers["location"]
        token_requests = backend.paths("/auth/v1/token")
        assert len(token_requests) == 1
        body = json.loads(token_requests[0].content)
        assert body == {"auth_code": "alice", "code_verifier": alice_verifier}
        assert body["code_verifier"] != bob_verifier

    def test_login_does_not_change_table_credentials(self, live_client, backend):
        verifier = _login(live_client).cookies[CODE_VERIFIER_COOKIE]
        live_client.cookies.set(CODE_VERIFIER_COOKIE, verifier, path="/auth")
        live_client.get("/auth/callback?code=alice", follow_redirects=False)

        live_client.cookies.clear()
        assert live_client.get("/api/posts").status_code == 200

        table_requests = backend.paths("/rest/v1/")
        assert [r.url.path for r in table_requests] == ["/rest/v1/profiles", "/rest/v1/posts"]
        for request in table_requests:
            assert request.headers["authorization"] == f"Bearer {settings.supabase_key}"
            assert "jwt-of-alice" not in request.headers["authorization"]

    def test_logout_without_token_reaches_no_backend(self, live_client, backend):
        response = live_client.post("/auth/logout")

        assert response.status_code == 401
        assert backend.requests == []

    def test_logout_revokes_only_the_bearer_session(self, live_client, backend):
        response = live_client.post("/auth/logout", headers={"Authorization": "Bearer jwt-of-alice"})

        assert response.status_code == 200
        (logout,) = backend.paths("/auth/v1/logout")
        assert logout.headers["authorization"] == "Bearer jwt-of-alice"
