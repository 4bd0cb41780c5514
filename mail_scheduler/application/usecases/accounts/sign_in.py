"""
===============================================================================
USE CASE: Sign In
===============================================================================

CRC CARD
-------------------------------------------------------------------------------
Class:
    SignInUseCase

Responsibilities:
    - AuthService.sign_in(email, password).
    - Cargar el perfil (users) y resolver el Actor explícito.
    - Auditar LoggedIn.
    - Devolver Session (no hay sesión global; el caller pasa session.actor
      a cada operación guardada).

Errors:
    - ValidationError: email/password vacíos
    - AuthenticationError: credenciales rechazadas o perfil inexistente
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Optional

from ....audit import AuditRecorder
from ....crosscutting.exceptions import AuthenticationError, ValidationError
from ....domain.access_policy import Actor, Capability, actor_for, capabilities_for
from ....domain.audit import AuditAction
from ....domain.repositories import UserRepository
from ....domain.services import AuthService
from ....identity.users import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """Identidad autenticada + rol resuelto."""

    user: User
    actor: Actor
    access_token: str = ""
    expires_at: Optional[datetime] = None

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        return capabilities_for(self.actor.role)


class SignInUseCase:
    def __init__(
        self,
        auth_service: AuthService,
        users: UserRepository,
        audit: AuditRecorder,
    ) -> None:
        self._auth = auth_service
        self._users = users
        self._audit = audit

    def execute(self, email: str, password: str) -> Session:
        email = (email or "").strip()
        if not email:
            raise ValidationError("Email is required.", field="email")
        if not password:
            raise ValidationError("Password is required.", field="password")

        auth_session = self._auth.sign_in(email, password)

        user = self._users.get_user(auth_session.user_id)
        if user is None:
            logger.warning(
                "Authenticated user has no profile",
                extra={"user_id": str(auth_session.user_id)},
            )
            raise AuthenticationError("User profile not found.")

        self._audit.record(
            user.id,
            AuditAction.LOGGED_IN,
            f"User '{user.name}' ({user.email}) signed in",
        )
        return Session(
            user=user,
            actor=actor_for(user),
            access_token=auth_session.access_token,
            expires_at=auth_session.expires_at,
        )
