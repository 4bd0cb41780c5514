"""
===============================================================================
USE CASE: Register Account
===============================================================================

Business Goal:
    Alta de un usuario: cuenta en el servicio de auth + perfil en la tabla
    users con el rol elegido, y rastro en auditoría.

CRC CARD
-------------------------------------------------------------------------------
Class:
    RegisterAccountUseCase

Responsibilities:
    - Validar: nombre >= 2 caracteres, email válido, password >= 6
      caracteres, confirmación igual al password (si se envía).
    - AuthService.sign_up(email, password) -> identidad.
    - Crear el perfil (User) con el id emitido por auth.
    - Auditar RegisteredAccount con el nuevo usuario como actor.

Errors:
    - ValidationError
    - AuthenticationError (auth rechazó el alta)
    - PersistenceError (perfil no pudo guardarse)
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ....audit import AuditRecorder
from ....crosscutting.exceptions import ValidationError
from ....domain.audit import AuditAction
from ....domain.repositories import UserRepository
from ....domain.services import AuthService
from ....domain.value_objects import validate_address
from ....identity.users import User, UserRole

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


@dataclass
class RegisterAccountInput:
    name: str
    email: str
    password: str
    role: UserRole = UserRole.STANDARD
    confirm_password: Optional[str] = None


class RegisterAccountUseCase:
    def __init__(
        self,
        auth_service: AuthService,
        users: UserRepository,
        audit: AuditRecorder,
    ) -> None:
        self._auth = auth_service
        self._users = users
        self._audit = audit

    def execute(self, input_data: RegisterAccountInput) -> User:
        name = (input_data.name or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"Name must have at least {MIN_NAME_LENGTH} characters.", field="name"
            )

        email = validate_address(input_data.email, field="email")

        password = input_data.password or ""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must have at least {MIN_PASSWORD_LENGTH} characters.",
                field="password",
            )
        if (
            input_data.confirm_password is not None
            and input_data.confirm_password != password
        ):
            raise ValidationError("Passwords do not match.", field="confirm_password")

        role = UserRole(input_data.role)

        identity = self._auth.sign_up(email, password)
        user = self._users.create_user(
            User(id=identity.user_id, name=name, email=identity.email, role=role)
        )

        self._audit.record(
            user.id,
            AuditAction.REGISTERED_ACCOUNT,
            f"New user '{user.name}' ({user.email}) registered with role '{user.role.value}'",
        )
        logger.info(
            "Account registered",
            extra={"user_id": str(user.id), "role": user.role.value},
        )
        return user
