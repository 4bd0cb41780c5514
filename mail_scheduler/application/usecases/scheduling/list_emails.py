"""
===============================================================================
USE CASES: Read side of scheduled emails
===============================================================================

Classes:
    - ListDueEmailsUseCase      (dispatcher) Scheduled y scheduled_at <= now,
                                scheduled_at ASC.
    - ListPendingEmailsUseCase  (dashboard) Scheduled, scheduled_at ASC,
                                scoped por owner salvo admin.
    - ListEmailHistoryUseCase   (historial) todos los estados, created_at DESC,
                                filtro de estado + búsqueda, scoped por owner.
    - GetScheduledEmailUseCase  un registro; standard solo el propio.

Regla de scoping:
    owner_scope(actor) es obligatorio en toda query de usuario. Omitirlo sería
    un bug de autorización.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, FrozenSet, List, Optional
from uuid import UUID

from ....crosscutting.exceptions import AuthorizationError, ValidationError
from ....domain.access_policy import (
    Actor,
    Capability,
    can_read_email,
    owner_scope,
    require_capability,
)
from ....domain.entities import EmailStatus, ScheduledEmail
from ....domain.repositories import EmailOrdering, ScheduledEmailRepository
from .email_access import load_email

DEFAULT_DUE_BATCH = 100
DEFAULT_HISTORY_LIMIT = 200
DEFAULT_PENDING_LIMIT = 500


class ListDueEmailsUseCase:
    """Contrato de lectura del dispatcher (sin actor de usuario)."""

    def __init__(
        self,
        repository: ScheduledEmailRepository,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._emails = repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(
        self, now: datetime | None = None, *, limit: int = DEFAULT_DUE_BATCH
    ) -> List[ScheduledEmail]:
        if limit <= 0:
            raise ValidationError("limit must be > 0.", field="limit")
        return self._emails.list_due(now or self._clock(), limit=limit)


class ListPendingEmailsUseCase:
    def __init__(
        self,
        repository: ScheduledEmailRepository,
        *,
        default_limit: int = DEFAULT_PENDING_LIMIT,
    ) -> None:
        self._emails = repository
        self._default_limit = default_limit

    def execute(
        self, actor: Actor | None, *, limit: int | None = None
    ) -> List[ScheduledEmail]:
        checked = require_capability(actor, Capability.VIEW_OWN_EMAILS)
        return self._emails.list_emails(
            owner_id=owner_scope(checked),
            statuses={EmailStatus.SCHEDULED},
            ordering=EmailOrdering.SCHEDULED_AT_ASC,
            limit=limit if limit and limit > 0 else self._default_limit,
        )


@dataclass(frozen=True)
class EmailHistoryQuery:
    """Filtros del historial (vacío => todos los estados)."""

    statuses: FrozenSet[EmailStatus] = field(default_factory=frozenset)
    search: Optional[str] = None
    limit: Optional[int] = None
    offset: int = 0


class ListEmailHistoryUseCase:
    def __init__(
        self,
        repository: ScheduledEmailRepository,
        *,
        default_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self._emails = repository
        self._default_limit = default_limit

    def execute(
        self, actor: Actor | None, query: EmailHistoryQuery | None = None
    ) -> List[ScheduledEmail]:
        checked = require_capability(actor, Capability.VIEW_OWN_EMAILS)
        query = query or EmailHistoryQuery()

        limit = query.limit if query.limit and query.limit > 0 else self._default_limit
        return self._emails.list_emails(
            owner_id=owner_scope(checked),
            statuses=query.statuses or None,
            search=query.search,
            ordering=EmailOrdering.CREATED_AT_DESC,
            limit=limit,
            offset=max(query.offset, 0),
        )


class GetScheduledEmailUseCase:
    def __init__(self, repository: ScheduledEmailRepository) -> None:
        self._emails = repository

    def execute(self, email_id: UUID, actor: Actor | None) -> ScheduledEmail:
        checked = require_capability(actor, Capability.VIEW_OWN_EMAILS)
        email = load_email(self._emails, email_id)
        if not can_read_email(email, checked):
            raise AuthorizationError("Access denied.")
        return email
