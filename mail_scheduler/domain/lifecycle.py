"""
===============================================================================
TARJETA CRC — domain/lifecycle.py
===============================================================================

Módulo:
    Máquina de estados de ScheduledEmail

Responsabilidades:
    - Declarar las transiciones legales y quién puede dispararlas.
    - Validar una transición pedida (estado actual -> destino, trigger).
    - Describir el "patch" de campos que acompaña cada transición
      (sent_at / error_message), para que el repositorio lo aplique en el
      mismo write condicional.

Colaboradores:
    - domain.entities.EmailStatus
    - domain.repositories.ScheduledEmailRepository.transition (CAS)
    - application/usecases/scheduling (cancel / mark_sent / mark_failed)

Reglas:
    SCHEDULED -> CANCELLED   trigger USER (owner o admin)
    SCHEDULED -> SENT        trigger DISPATCHER, solo si scheduled_at <= sent_at
    SCHEDULED -> FAILED      trigger DISPATCHER
    SENT / FAILED / CANCELLED son terminales.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..crosscutting.exceptions import InvalidTransitionError, ValidationError
from .entities import EmailStatus


class TransitionTrigger(str, Enum):
    """Origen de la transición."""

    USER = "user"
    DISPATCHER = "dispatcher"


_TRANSITIONS: dict[tuple[EmailStatus, EmailStatus], TransitionTrigger] = {
    (EmailStatus.SCHEDULED, EmailStatus.CANCELLED): TransitionTrigger.USER,
    (EmailStatus.SCHEDULED, EmailStatus.SENT): TransitionTrigger.DISPATCHER,
    (EmailStatus.SCHEDULED, EmailStatus.FAILED): TransitionTrigger.DISPATCHER,
}


@dataclass(frozen=True)
class StatusTransition:
    """
    Transición validada, lista para el write condicional.

    expected: estado que DEBE tener la fila para que el update aplique.
    """

    expected: EmailStatus
    target: EmailStatus
    sent_at: Optional[datetime] = None
    error_message: Optional[str] = None


def allowed_targets(current: EmailStatus) -> frozenset[EmailStatus]:
    """Destinos alcanzables desde un estado."""
    return frozenset(target for (src, target) in _TRANSITIONS if src == current)


def ensure_transition(
    current: EmailStatus, target: EmailStatus, trigger: TransitionTrigger
) -> None:
    """
    Valida que current -> target sea legal para el trigger dado.

    Raises:
        InvalidTransitionError: si la transición no existe o el trigger no
        corresponde (ej: un usuario intentando marcar SENT).
    """
    expected_trigger = _TRANSITIONS.get((current, target))
    if expected_trigger is None:
        raise InvalidTransitionError(
            f"Cannot move email from {current.value} to {target.value}.",
            current_status=current.value,
            target_status=target.value,
        )
    if expected_trigger != trigger:
        raise InvalidTransitionError(
            f"Transition to {target.value} is reserved for {expected_trigger.value}.",
            current_status=current.value,
            target_status=target.value,
        )


def cancellation() -> StatusTransition:
    return StatusTransition(
        expected=EmailStatus.SCHEDULED, target=EmailStatus.CANCELLED
    )


def ensure_due(scheduled_at: datetime, at: datetime) -> None:
    """Un envío anterior a scheduled_at no es una entrega válida."""
    if scheduled_at > at:
        raise InvalidTransitionError(
            f"Email is not due until {scheduled_at.isoformat()}.",
            current_status=EmailStatus.SCHEDULED.value,
            target_status=EmailStatus.SENT.value,
        )


def delivery(sent_at: datetime) -> StatusTransition:
    return StatusTransition(
        expected=EmailStatus.SCHEDULED, target=EmailStatus.SENT, sent_at=sent_at
    )


def delivery_failure(failed_at: datetime, reason: str) -> StatusTransition:
    """Transición a FAILED; reason vacío no es aceptable."""
    cleaned = (reason or "").strip()
    if not cleaned:
        raise ValidationError("Failure reason is required.", field="reason")
    return StatusTransition(
        expected=EmailStatus.SCHEDULED,
        target=EmailStatus.FAILED,
        sent_at=failed_at,
        error_message=cleaned,
    )
