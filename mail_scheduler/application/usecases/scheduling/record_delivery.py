"""
===============================================================================
USE CASES: Dispatcher transitions (mark sent / mark failed)
===============================================================================

Business Goal:
    Exponer al dispatcher externo las dos transiciones que le pertenecen:
      - Scheduled -> Sent   (mark_sent(id, sent_at))
      - Scheduled -> Failed (mark_failed(id, failed_at, reason))

CRC CARD
-------------------------------------------------------------------------------
Classes:
    MarkEmailSentUseCase, MarkEmailFailedUseCase

Responsibilities:
    - Transición con trigger DISPATCHER y write condicional.
    - sent_at = momento informado por el dispatcher (o el clock si falta).
    - Rechazar Sent si sent_at es anterior a scheduled_at.
    - Auditar DeliveredSchedule / DeliveryFailed con actor_id = None.

Notes:
    - No hay reintento en este núcleo: Failed es terminal.
    - Un dispatcher duplicado (o un reintento) pierde el CAS y recibe
      InvalidTransitionError.
===============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID

from ....audit import AuditRecorder
from ....domain.audit import AuditAction
from ....domain.entities import EmailStatus, ScheduledEmail
from ....domain.lifecycle import (
    TransitionTrigger,
    delivery,
    delivery_failure,
    ensure_due,
    ensure_transition,
)
from ....domain.repositories import ScheduledEmailRepository
from .email_access import apply_transition, load_email

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _default_clock() -> datetime:
    return datetime.now(timezone.utc)


class MarkEmailSentUseCase:
    def __init__(
        self,
        repository: ScheduledEmailRepository,
        audit: AuditRecorder,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        self._emails = repository
        self._audit = audit
        self._clock = clock or _default_clock

    def execute(
        self, email_id: UUID, sent_at: datetime | None = None
    ) -> ScheduledEmail:
        email = load_email(self._emails, email_id)
        at = sent_at or self._clock()
        ensure_transition(email.status, EmailStatus.SENT, TransitionTrigger.DISPATCHER)
        ensure_due(email.scheduled_at, at)
        sent = apply_transition(
            self._emails, email, delivery(at), TransitionTrigger.DISPATCHER
        )

        self._audit.record(
            None,
            AuditAction.DELIVERED_SCHEDULE,
            f"Email '{sent.subject}' ({sent.id}) delivered to "
            f"{len(sent.recipients)} recipient(s)",
        )
        logger.info("Scheduled email delivered", extra={"email_id": str(sent.id)})
        return sent


class MarkEmailFailedUseCase:
    def __init__(
        self,
        repository: ScheduledEmailRepository,
        audit: AuditRecorder,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        self._emails = repository
        self._audit = audit
        self._clock = clock or _default_clock

    def execute(
        self, email_id: UUID, reason: str, failed_at: datetime | None = None
    ) -> ScheduledEmail:
        # Validar reason antes de tocar el store.
        transition = delivery_failure(failed_at or self._clock(), reason)
        email = load_email(self._emails, email_id)
        failed = apply_transition(
            self._emails, email, transition, TransitionTrigger.DISPATCHER
        )

        self._audit.record(
            None,
            AuditAction.DELIVERY_FAILED,
            f"Delivery of email '{failed.subject}' ({failed.id}) failed: "
            f"{failed.error_message}",
        )
        logger.warning(
            "Scheduled email delivery failed",
            extra={"email_id": str(failed.id), "reason": failed.error_message},
        )
        return failed
