"""
===============================================================================
USE CASE: Create Scheduled Email
===============================================================================

Business Goal:
    Registrar un email para envío futuro en estado Scheduled y dejar rastro
    en auditoría (CreatedSchedule).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateScheduledEmailUseCase

Responsibilities:
    - Exigir actor con capacidad COMPOSE_EMAIL.
    - Validar input:
        * sender: dirección válida
        * recipients: >= 1, cada una válida (texto libre "a; b, c" aceptado)
        * cc: opcional, cada una válida
        * subject / body: no vacíos
        * scheduled_at: timezone-aware y estrictamente futuro
    - Persistir con owner_id = actor.user_id.
    - Auditar CreatedSchedule (best-effort).

Collaborators:
    - ScheduledEmailRepository.create_email
    - AuditRecorder.record
    - domain.value_objects (parseo/validación de direcciones)

-------------------------------------------------------------------------------
ERRORS
-------------------------------------------------------------------------------
    - AuthorizationError: sin actor / sin capacidad
    - ValidationError: cualquier campo inválido
    - PersistenceError: store no disponible
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional
from uuid import UUID, uuid4

from ....audit import AuditRecorder
from ....crosscutting.exceptions import ValidationError
from ....domain.access_policy import Actor, Capability, require_capability
from ....domain.audit import AuditAction
from ....domain.entities import EmailStatus, ScheduledEmail
from ....domain.repositories import ScheduledEmailRepository
from ....domain.value_objects import validate_address, validate_address_list

logger = logging.getLogger(__name__)


@dataclass
class CreateScheduledEmailInput:
    """
    DTO de entrada del compose.

    recipients / cc aceptan lista o texto separado por ',' o ';'.
    """

    sender: str
    recipients: str | Iterable[str]
    subject: str
    body: str
    scheduled_at: datetime
    cc: str | Iterable[str] | None = None


class CreateScheduledEmailUseCase:
    def __init__(
        self,
        repository: ScheduledEmailRepository,
        audit: AuditRecorder,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._emails = repository
        self._audit = audit
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._new_id = id_factory

    def execute(
        self, input_data: CreateScheduledEmailInput, actor: Actor | None
    ) -> ScheduledEmail:
        checked = require_capability(actor, Capability.COMPOSE_EMAIL)

        # 1) Validación (guard clauses, primer error gana)
        sender = validate_address(input_data.sender, field="sender")
        recipients = validate_address_list(
            input_data.recipients, field="recipients", required=True
        )
        cc = validate_address_list(input_data.cc, field="cc", required=False)
        subject = self._require_text(input_data.subject, field="subject")
        body = self._require_text(input_data.body, field="body")
        scheduled_at = self._validate_schedule(input_data.scheduled_at)

        # 2) Persistencia
        created = self._emails.create_email(
            ScheduledEmail(
                id=self._new_id(),
                owner_id=checked.user_id,
                sender=sender,
                recipients=recipients,
                cc=cc,
                subject=subject,
                body=body,
                scheduled_at=scheduled_at,
                status=EmailStatus.SCHEDULED,
            )
        )

        # 3) Auditoría (después del write exitoso)
        self._audit.record(
            checked.user_id,
            AuditAction.CREATED_SCHEDULE,
            f"User '{checked.user_id}' scheduled email '{created.subject}' "
            f"to {', '.join(created.recipients)} for {created.scheduled_at.isoformat()}",
        )
        logger.info(
            "Scheduled email created",
            extra={"email_id": str(created.id), "owner_id": str(created.owner_id)},
        )
        return created

    @staticmethod
    def _require_text(value: str | None, *, field: str) -> str:
        if value is None or not value.strip():
            raise ValidationError(f"{field} is required.", field=field)
        return value

    def _validate_schedule(self, scheduled_at: datetime | None) -> datetime:
        if scheduled_at is None:
            raise ValidationError("scheduled_at is required.", field="scheduled_at")
        if scheduled_at.tzinfo is None or scheduled_at.utcoffset() is None:
            raise ValidationError(
                "scheduled_at must be timezone-aware.", field="scheduled_at"
            )
        if scheduled_at <= self._clock():
            raise ValidationError(
                "scheduled_at must be in the future.", field="scheduled_at"
            )
        return scheduled_at
