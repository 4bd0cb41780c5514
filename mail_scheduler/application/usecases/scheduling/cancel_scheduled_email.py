"""
===============================================================================
USE CASE: Cancel Scheduled Email
===============================================================================

CRC CARD
-------------------------------------------------------------------------------
Class:
    CancelScheduledEmailUseCase

Responsibilities:
    - Cargar el email (NotFoundError si no existe).
    - Autorizar: owner con CANCEL_OWN_EMAILS o admin con CANCEL_ANY_EMAIL.
    - Transición Scheduled -> Cancelled con write condicional.
    - Auditar CancelledSchedule (best-effort).

Errors:
    - AuthorizationError: actor ausente o ajeno al email
    - InvalidTransitionError: email no está en Scheduled (incluye carrera)
    - NotFoundError / PersistenceError
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....audit import AuditRecorder
from ....crosscutting.exceptions import AuthorizationError
from ....domain.access_policy import Actor, can_cancel_email, require_actor
from ....domain.audit import AuditAction
from ....domain.entities import ScheduledEmail
from ....domain.lifecycle import TransitionTrigger, cancellation
from ....domain.repositories import ScheduledEmailRepository
from .email_access import apply_transition, load_email

logger = logging.getLogger(__name__)


class CancelScheduledEmailUseCase:
    def __init__(
        self, repository: ScheduledEmailRepository, audit: AuditRecorder
    ) -> None:
        self._emails = repository
        self._audit = audit

    def execute(self, email_id: UUID, actor: Actor | None) -> ScheduledEmail:
        checked = require_actor(actor)
        email = load_email(self._emails, email_id)

        if not can_cancel_email(email, checked):
            raise AuthorizationError("Only the owner or an admin may cancel this email.")

        cancelled = apply_transition(
            self._emails, email, cancellation(), TransitionTrigger.USER
        )

        self._audit.record(
            checked.user_id,
            AuditAction.CANCELLED_SCHEDULE,
            f"User '{checked.user_id}' cancelled scheduled email '{cancelled.subject}' "
            f"({cancelled.id})",
        )
        logger.info(
            "Scheduled email cancelled",
            extra={"email_id": str(cancelled.id), "by_admin": checked.is_admin},
        )
        return cancelled
