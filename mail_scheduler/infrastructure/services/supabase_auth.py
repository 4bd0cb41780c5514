"""
============================================================
TARJETA CRC — infrastructure/services/supabase_auth.py
============================================================
Class: SupabaseAuthClient

Responsibilities:
  - Implementar AuthService contra el endpoint GoTrue de Supabase.
  - sign_in:  POST /auth/v1/token?grant_type=password
  - sign_up:  POST /auth/v1/signup
  - Traducir rechazos HTTP y errores de transporte a AuthenticationError.

Collaborators:
  - httpx (HTTP client, timeout explícito)
  - domain.services.AuthSession / AuthIdentity
  - crosscutting.exceptions.AuthenticationError

Notes:
  - El header `apikey` es la anon key del proyecto.
  - El password nunca se loguea (el logger además redacta por clave).
============================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import httpx

from ...crosscutting.exceptions import AuthenticationError
from ...crosscutting.logger import logger
from ...domain.services import AuthIdentity, AuthSession

_TOKEN_PATH = "/auth/v1/token"
_SIGNUP_PATH = "/auth/v1/signup"


class SupabaseAuthClient:
    """Cliente síncrono de Supabase Auth (GoTrue)."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"apikey": api_key, "Content-Type": "application/json"},
            timeout=timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    # =========================================================
    # AuthService
    # =========================================================
    def sign_in(self, email: str, password: str) -> AuthSession:
        payload = self._post(
            _TOKEN_PATH,
            params={"grant_type": "password"},
            body={"email": email, "password": password},
            operation="sign_in",
        )

        user = payload.get("user") or {}
        access_token = payload.get("access_token")
        if not access_token or not user.get("id"):
            raise AuthenticationError("Auth service returned an incomplete session.")

        return AuthSession(
            user_id=self._parse_user_id(user["id"]),
            email=user.get("email") or email,
            access_token=access_token,
            expires_at=self._expires_at(payload),
        )

    def sign_up(self, email: str, password: str) -> AuthIdentity:
        payload = self._post(
            _SIGNUP_PATH,
            params=None,
            body={"email": email, "password": password},
            operation="sign_up",
        )

        # R: con autoconfirm GoTrue devuelve una sesión; si no, el usuario plano.
        user = payload.get("user") or payload
        if not user.get("id"):
            raise AuthenticationError("Auth service did not return a user id.")

        return AuthIdentity(
            user_id=self._parse_user_id(user["id"]),
            email=user.get("email") or email,
        )

    # =========================================================
    # Helpers
    # =========================================================
    def _post(
        self,
        path: str,
        *,
        params: dict[str, str] | None,
        body: dict[str, Any],
        operation: str,
    ) -> dict[str, Any]:
        try:
            response = self._client.post(path, params=params, json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning(
                "auth service rejected request",
                extra={"operation": operation, "status": status},
            )
            raise AuthenticationError(
                self._error_message(exc.response), original_error=exc
            ) from exc
        except httpx.TimeoutException as exc:
            logger.error(
                "auth service timeout",
                extra={"operation": operation},
            )
            raise AuthenticationError(
                "Auth service timed out.", original_error=exc
            ) from exc
        except httpx.HTTPError as exc:
            logger.error(
                "auth service unreachable",
                extra={"operation": operation, "error": str(exc)},
            )
            raise AuthenticationError(
                "Auth service unavailable.", original_error=exc
            ) from exc
        except ValueError as exc:
            raise AuthenticationError(
                "Auth service returned an invalid response.", original_error=exc
            ) from exc

        if not isinstance(payload, dict):
            raise AuthenticationError("Auth service returned an invalid response.")
        return payload

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if isinstance(data, dict):
            for key in ("error_description", "msg", "message", "error"):
                value = data.get(key)
                if isinstance(value, str) and value:
                    return value
        return f"Authentication failed (HTTP {response.status_code})."

    @staticmethod
    def _parse_user_id(raw: Any) -> UUID:
        try:
            return UUID(str(raw))
        except ValueError as exc:
            raise AuthenticationError(
                "Auth service returned a malformed user id.", original_error=exc
            ) from exc

    @staticmethod
    def _expires_at(payload: dict[str, Any]) -> datetime | None:
        expires_at = payload.get("expires_at")
        if isinstance(expires_at, (int, float)):
            return datetime.fromtimestamp(expires_at, tz=timezone.utc)
        expires_in = payload.get("expires_in")
        if isinstance(expires_in, (int, float)):
            return datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return None
