"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/scheduled_email.py
============================================================
Class: PostgresScheduledEmailRepository

Responsibilities:
- Acceso a datos de scheduled_emails en PostgreSQL (SQL crudo).
- Implementar la transición de estado como write condicional atómico:
      UPDATE ... WHERE id = %s AND status = %s RETURNING ...
  Si otra escritura ganó la carrera, no hay fila devuelta (=> None).
- Listados determinísticos: due/pendientes por scheduled_at ASC,
  historial por created_at DESC.

Collaborators:
- domain.entities.ScheduledEmail, EmailStatus
- domain.lifecycle.StatusTransition
- postgres.base.PostgresRepository (errores -> PersistenceError)

Constraints / Notes:
- Sin lógica de negocio (policy/lifecycle viven arriba).
- Queries siempre parametrizadas.
- recipients / cc son text[] (psycopg adapta list[str]).
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Collection, List, Optional
from uuid import UUID

from ....domain.entities import EmailStatus, ScheduledEmail
from ....domain.lifecycle import StatusTransition
from ....domain.repositories import EmailOrdering
from .base import PostgresRepository, like_pattern


class PostgresScheduledEmailRepository(PostgresRepository):
    """R: Implementación PostgreSQL del Scheduled-Email Store."""

    _SELECT_COLUMNS = """
        id, owner_id, sender, recipients, cc, subject, body,
        scheduled_at, sent_at, status, error_message, created_at, updated_at
    """

    _ORDER_BY = {
        EmailOrdering.SCHEDULED_AT_ASC: "ORDER BY scheduled_at ASC, id ASC",
        EmailOrdering.CREATED_AT_DESC: "ORDER BY created_at DESC, id DESC",
    }

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_email(row: tuple) -> ScheduledEmail:
        (
            email_id,
            owner_id,
            sender,
            recipients,
            cc,
            subject,
            body,
            scheduled_at,
            sent_at,
            status,
            error_message,
            created_at,
            updated_at,
        ) = row

        return ScheduledEmail(
            id=email_id,
            owner_id=owner_id,
            sender=sender,
            recipients=list(recipients or []),
            cc=list(cc or []),
            subject=subject,
            body=body,
            scheduled_at=scheduled_at,
            sent_at=sent_at,
            status=EmailStatus(status),
            error_message=error_message,
            created_at=created_at,
            updated_at=updated_at,
        )

    # =========================================================
    # Escrituras
    # =========================================================
    def create_email(self, email: ScheduledEmail) -> ScheduledEmail:
        row = self._fetchone(
            query=f"""
                INSERT INTO scheduled_emails (
                    id, owner_id, sender, recipients, cc, subject, body,
                    scheduled_at, status, created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, NOW(), NOW())
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=[
                email.id,
                email.owner_id,
                email.sender,
                list(email.recipients),
                list(email.cc),
                email.subject,
                email.body,
                email.scheduled_at,
                EmailStatus.SCHEDULED.value,
            ],
            context_msg="PostgresScheduledEmailRepository: Failed to create email",
            extra={"email_id": str(email.id), "owner_id": str(email.owner_id)},
        )
        return self._row_to_email(row)

    def transition(
        self, email_id: UUID, transition: StatusTransition
    ) -> Optional[ScheduledEmail]:
        error_message = (
            transition.error_message
            if transition.target == EmailStatus.FAILED
            else None
        )
        row = self._fetchone(
            query=f"""
                UPDATE scheduled_emails
                SET status = %s,
                    sent_at = %s,
                    error_message = %s,
                    updated_at = NOW()
                WHERE id = %s AND status = %s
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=[
                transition.target.value,
                transition.sent_at,
                error_message,
                email_id,
                transition.expected.value,
            ],
            context_msg="PostgresScheduledEmailRepository: Failed to transition email",
            extra={
                "email_id": str(email_id),
                "expected_status": transition.expected.value,
                "target_status": transition.target.value,
            },
        )
        return self._row_to_email(row) if row else None

    # =========================================================
    # Lecturas
    # =========================================================
    def get_email(self, email_id: UUID) -> Optional[ScheduledEmail]:
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} FROM scheduled_emails WHERE id = %s",
            params=[email_id],
            context_msg="PostgresScheduledEmailRepository: Failed to get email",
            extra={"email_id": str(email_id)},
        )
        return self._row_to_email(row) if row else None

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

        conditions: list[str] = []
        params: list[object] = []

        if owner_id is not None:
            conditions.append("owner_id = %s")
            params.append(owner_id)

        if statuses:
            conditions.append("status = ANY(%s)")
            params.append([EmailStatus(s).value for s in statuses])

        needle = (search or "").strip()
        if needle:
            pattern = like_pattern(needle)
            conditions.append(
                "(subject ILIKE %s OR EXISTS "
                "(SELECT 1 FROM unnest(recipients) AS r WHERE r ILIKE %s))"
            )
            params.extend([pattern, pattern])

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        rows = self._fetchall(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM scheduled_emails
                {where_clause}
                {self._ORDER_BY[ordering]}
                LIMIT %s OFFSET %s
            """,
            params=[*params, limit, max(offset, 0)],
            context_msg="PostgresScheduledEmailRepository: Failed to list emails",
            extra={
                "owner_id": str(owner_id) if owner_id else None,
                "ordering": ordering.value,
                "limit": limit,
            },
        )
        return [self._row_to_email(row) for row in rows]

    def list_due(self, now: datetime, *, limit: int = 100) -> List[ScheduledEmail]:
        if limit <= 0:
            return []

        rows = self._fetchall(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM scheduled_emails
                WHERE status = %s AND scheduled_at <= %s
                ORDER BY scheduled_at ASC, id ASC
                LIMIT %s
            """,
            params=[EmailStatus.SCHEDULED.value, now, limit],
            context_msg="PostgresScheduledEmailRepository: Failed to list due emails",
            extra={"now": now.isoformat(), "limit": limit},
        )
        return [self._row_to_email(row) for row in rows]
