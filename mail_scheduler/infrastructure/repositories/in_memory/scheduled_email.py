"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/scheduled_email.py
============================================================
Class: InMemoryScheduledEmailRepository

Responsibilities:
  - Almacenar emails agendados en memoria (tests / local dev).
  - Implementar el write condicional (compare-and-set sobre status) bajo Lock,
    con la misma semántica que el UPDATE ... WHERE status = %s de Postgres.
  - Mantener ordering determinístico alineado con Postgres:
      pendientes/due: scheduled_at ASC, id ASC
      historial:      created_at DESC, id DESC

Collaborators:
  - domain.entities.ScheduledEmail, EmailStatus
  - domain.lifecycle.StatusTransition
  - domain.repositories.ScheduledEmailRepository (contrato)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Repo puro: NO aplica política de acceso (owner_id lo pasa el caller).
  - Copias defensivas: los callers nunca comparten listas mutables con el repo.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Collection, Dict, List, Optional
from uuid import UUID

from ....domain.entities import EmailStatus, ScheduledEmail
from ....domain.lifecycle import StatusTransition
from ....domain.repositories import EmailOrdering, ScheduledEmailRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryScheduledEmailRepository(ScheduledEmailRepository):
    """
    Repositorio in-memory, thread-safe, para ScheduledEmail.

    Modelo mental:
    - _emails es la "tabla" en memoria (UUID -> ScheduledEmail).
    - transition() lee y escribe bajo el MISMO lock: eso es el CAS.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._lock = Lock()
        self._emails: Dict[UUID, ScheduledEmail] = {}
        self._now = clock or _utcnow

    @staticmethod
    def _copy(email: ScheduledEmail) -> ScheduledEmail:
        return replace(email, recipients=list(email.recipients), cc=list(email.cc))

    @staticmethod
    def _matches_search(email: ScheduledEmail, search: str) -> bool:
        needle = search.lower()
        if needle in email.subject.lower():
            return True
        return any(needle in r.lower() for r in email.recipients)

    @staticmethod
    def _sorted(
        items: List[ScheduledEmail], ordering: EmailOrdering
    ) -> List[ScheduledEmail]:
        if ordering == EmailOrdering.SCHEDULED_AT_ASC:
            return sorted(items, key=lambda e: (e.scheduled_at, str(e.id)))
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(
            items,
            key=lambda e: (e.created_at or oldest, str(e.id)),
            reverse=True,
        )

    # =========================================================
    # Escrituras
    # =========================================================
    def create_email(self, email: ScheduledEmail) -> ScheduledEmail:
        now = self._now()
        created = replace(
            self._copy(email),
            status=EmailStatus.SCHEDULED,
            sent_at=None,
            error_message=None,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._emails[created.id] = created
        return self._copy(created)

    def transition(
        self, email_id: UUID, transition: StatusTransition
    ) -> Optional[ScheduledEmail]:
        with self._lock:
            current = self._emails.get(email_id)
            if current is None or current.status != transition.expected:
                return None

            updated = replace(
                current,
                status=transition.target,
                sent_at=transition.sent_at,
                error_message=(
                    transition.error_message
                    if transition.target == EmailStatus.FAILED
                    else None
                ),
                updated_at=self._now(),
            )
            self._emails[email_id] = updated
            return self._copy(updated)

    # =========================================================
    # Lecturas
    # =========================================================
    def get_email(self, email_id: UUID) -> Optional[ScheduledEmail]:
        with self._lock:
            email = self._emails.get(email_id)
        return self._copy(email) if email is not None else None

    def list_emails(
        self,
        *,
        owner_id: UUID | None = None,
        statuses: Collection[EmailStatus] | None = None,
        search: str | None = None,
        ordering: EmailOrdering = EmailOrdering.CREATED_AT_DESC,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ScheduledEmail]:
        if limit <= 0:
            return []

        with self._lock:
            values = list(self._emails.values())

        wanted = set(statuses) if statuses else None
        needle = (search or "").strip()

        def predicate(e: ScheduledEmail) -> bool:
            if owner_id is not None and e.owner_id != owner_id:
                return False
            if wanted is not None and e.status not in wanted:
                return False
            if needle and not self._matches_search(e, needle):
                return False
            return True

        selected = self._sorted([e for e in values if predicate(e)], ordering)
        offset = max(offset, 0)
        return [self._copy(e) for e in selected[offset : offset + limit]]

    def list_due(self, now: datetime, *, limit: int = 100) -> List[ScheduledEmail]:
        if limit <= 0:
            return []

        with self._lock:
            due = [e for e in self._emails.values() if e.is_due(now)]

        due = self._sorted(due, EmailOrdering.SCHEDULED_AT_ASC)
        return [self._copy(e) for e in due[:limit]]

    # -------------------------------------------------------------------------
    # Testing helpers
    # -------------------------------------------------------------------------
    def clear(self) -> None:
        with self._lock:
            self._emails.clear()
