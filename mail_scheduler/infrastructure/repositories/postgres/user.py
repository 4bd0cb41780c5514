"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Leer/crear perfiles de usuario (tabla users).
  - El id es el mismo que emite el servicio de auth.

Collaborators:
  - identity.users.User / UserRole
  - postgres.base.PostgresRepository
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ....identity.users import User, UserRole
from .base import PostgresRepository


class PostgresUserRepository(PostgresRepository):
    _SELECT_COLUMNS = "id, name, email, role, created_at"

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        user_id, name, email, role, created_at = row
        return User(
            id=user_id,
            name=name,
            email=email,
            role=UserRole(role),
            created_at=created_at,
        )

    def get_user(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} FROM users WHERE id = %s",
            params=[user_id],
            context_msg="PostgresUserRepository: Failed to get user",
            extra={"user_id": str(user_id)},
        )
        return self._row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} FROM users WHERE lower(email) = %s",
            params=[email.strip().lower()],
            context_msg="PostgresUserRepository: Failed to get user by email",
            extra={},
        )
        return self._row_to_user(row) if row else None

    def create_user(self, user: User) -> User:
        row = self._fetchone(
            query=f"""
                INSERT INTO users (id, name, email, role, created_at)
                VALUES (%s, %s, %s, %s, NOW())
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=[user.id, user.name, user.email, user.role.value],
            context_msg="PostgresUserRepository: Failed to create user",
            extra={"user_id": str(user.id)},
        )
        return self._row_to_user(row)
