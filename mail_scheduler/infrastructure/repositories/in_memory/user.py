"""In-memory user profile repository (tests / local dev)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....identity.users import User


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def get_user(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        normalized = email.strip().lower()
        with self._lock:
            for user in self._users.values():
                if user.email.lower() == normalized:
                    return user
        return None

    def create_user(self, user: User) -> User:
        created = replace(user, created_at=user.created_at or datetime.now(timezone.utc))
        with self._lock:
            self._users[created.id] = created
        return created
