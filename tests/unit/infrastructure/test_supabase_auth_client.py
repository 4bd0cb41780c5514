"""
Name: Supabase Auth Client Tests

Responsibilities:
  - Request shape (paths, grant_type, apikey header)
  - Session / identity mapping
  - Rejections, timeouts and malformed payloads -> AuthenticationError

Notes:
  - Offline: httpx.MockTransport, no network
"""

from __future__ import annotations

import json
from uuid import uuid4

import httpx
import pytest

from mail_scheduler.crosscutting.exceptions import AuthenticationError
from mail_scheduler.infrastructure.services.supabase_auth import SupabaseAuthClient

pytestmark = pytest.mark.unit

USER_ID = uuid4()


def _client(handler) -> SupabaseAuthClient:
    return SupabaseAuthClient(
        base_url="https://project.supabase.co/",
        api_key="anon-key",
        timeout_seconds=2.0,
        transport=httpx.MockTransport(handler),
    )


class TestSignIn:
    def test_password_grant(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "access_token": "jwt-token",
                    "expires_at": 1_900_000_000,
                    "user": {"id": str(USER_ID), "email": "ana@example.com"},
                },
            )

        session = _client(handler).sign_in("ana@example.com", "secret1")

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/auth/v1/token"
        assert request.url.params["grant_type"] == "password"
        assert request.headers["apikey"] == "anon-key"
        assert json.loads(request.content) == {
            "email": "ana@example.com",
            "password": "secret1",
        }
        assert session.user_id == USER_ID
        assert session.access_token == "jwt-token"
        assert session.expires_at is not None
        assert session.expires_at.year >= 2030

    def test_rejected_credentials(self):
        def handler(request):
            return httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
            )

        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            _client(handler).sign_in("ana@example.com", "bad")

    def test_incomplete_session(self):
        def handler(request):
            return httpx.Response(200, json={"user": {"id": str(USER_ID)}})

        with pytest.raises(AuthenticationError, match="incomplete"):
            _client(handler).sign_in("ana@example.com", "secret1")

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(AuthenticationError, match="timed out") as exc_info:
            _client(handler).sign_in("ana@example.com", "secret1")
        assert isinstance(exc_info.value.original_error, httpx.ReadTimeout)

    def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(AuthenticationError, match="unavailable"):
            _client(handler).sign_in("ana@example.com", "secret1")

    def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(AuthenticationError, match="invalid response"):
            _client(handler).sign_in("ana@example.com", "secret1")


class TestSignUp:
    def test_plain_user_payload(self):
        def handler(request):
            assert request.url.path == "/auth/v1/signup"
            return httpx.Response(200, json={"id": str(USER_ID), "email": "ana@example.com"})

        identity = _client(handler).sign_up("ana@example.com", "secret1")
        assert identity.user_id == USER_ID
        assert identity.email == "ana@example.com"

    def test_session_payload(self):
        def handler(request):
            return httpx.Response(
                200,
                json={"access_token": "t", "user": {"id": str(USER_ID), "email": "ana@example.com"}},
            )

        assert _client(handler).sign_up("ana@example.com", "secret1").user_id == USER_ID

    def test_already_registered(self):
        def handler(request):
            return httpx.Response(422, json={"msg": "User already registered"})

        with pytest.raises(AuthenticationError, match="already registered"):
            _client(handler).sign_up("ana@example.com", "secret1")

    def test_malformed_user_id(self):
        def handler(request):
            return httpx.Response(200, json={"id": "not-a-uuid"})

        with pytest.raises(AuthenticationError, match="malformed"):
            _client(handler).sign_up("ana@example.com", "secret1")

    def test_error_without_body(self):
        def handler(request):
            return httpx.Response(500)

        with pytest.raises(AuthenticationError, match="HTTP 500"):
            _client(handler).sign_up("ana@example.com", "secret1")


def test_base_url_required():
    with pytest.raises(ValueError):
        SupabaseAuthClient(base_url="", api_key="k")
