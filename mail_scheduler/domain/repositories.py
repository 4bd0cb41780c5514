"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- domain.entities: ScheduledEmail, DeliveryConfiguration
- domain.audit: AuditRecord, AuditFilter
- domain.lifecycle: StatusTransition
- infrastructure.repositories: postgres / in_memory implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Repositories do NOT apply access policy; callers pass the owner scope.
- Any storage failure or timeout surfaces as PersistenceError.
"""

from datetime import datetime
from enum import Enum
from typing import Collection, List, Optional, Protocol
from uuid import UUID

from ..identity.users import User
from .audit import AuditFilter, AuditRecord
from .entities import DeliveryConfiguration, EmailStatus, ScheduledEmail
from .lifecycle import StatusTransition


class EmailOrdering(str, Enum):
    """Orden de listados de emails."""

    # Pendientes / due: el más próximo primero.
    SCHEDULED_AT_ASC = "scheduled_at_asc"
    # Historial: el más reciente primero.
    CREATED_AT_DESC = "created_at_desc"


class ScheduledEmailRepository(Protocol):
    """
    R: Interface for scheduled email persistence.

    Implementations must provide:
      - insert with system-maintained created_at/updated_at
      - owner-scoped listings
      - due query (status = Scheduled AND scheduled_at <= now)
      - conditional (compare-and-set) status transitions
    """

    def create_email(self, email: ScheduledEmail) -> ScheduledEmail:
        """R: Persist a new record; returns the stored copy."""
        ...

    def get_email(self, email_id: UUID) -> Optional[ScheduledEmail]:
        """R: Fetch by id (None if missing)."""
        ...

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
        """
        R: List records.

        owner_id=None means "all owners" and MUST only be passed for admins.
        search is case-insensitive over subject and recipients.
        """
        ...

    def list_due(self, now: datetime, *, limit: int = 100) -> List[ScheduledEmail]:
        """R: Scheduled records with scheduled_at <= now, earliest first."""
        ...

    def transition(
        self, email_id: UUID, transition: StatusTransition
    ) -> Optional[ScheduledEmail]:
        """
        R: Atomic conditional write.

        Applies target status (+ sent_at / error_message) only if the row's
        current status equals transition.expected. Returns the updated record,
        or None when no row matched (missing or status changed).
        """
        ...


class AuditRecordRepository(Protocol):
    """R: Append-only audit store."""

    def append(self, record: AuditRecord) -> AuditRecord:
        """R: Insert a record; returns it with timestamp set."""
        ...

    def list_records(
        self,
        audit_filter: AuditFilter | None = None,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> List[AuditRecord]:
        """R: Newest first (timestamp DESC, id DESC)."""
        ...


class DeliveryConfigurationRepository(Protocol):
    """R: Singleton SMTP configuration store."""

    def get_configuration(self) -> Optional[DeliveryConfiguration]:
        ...

    def save_configuration(
        self, configuration: DeliveryConfiguration
    ) -> DeliveryConfiguration:
        """R: Full replace (upsert on id)."""
        ...


class UserRepository(Protocol):
    """R: Application user profiles."""

    def get_user(self, user_id: UUID) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def create_user(self, user: User) -> User:
        ...
