"""
===============================================================================
TARJETA CRC — application/usecases/scheduling/email_access.py
===============================================================================

Módulo:
    Helpers compartidos por los casos de uso de scheduling

Responsabilidades:
    - Cargar un email o levantar NotFoundError.
    - Ejecutar una transición de estado completa:
        1) validar current -> target para el trigger (lifecycle)
        2) write condicional en el repositorio (CAS sobre el estado esperado)
        3) si el CAS no aplica (carrera perdida), releer y reportar
           InvalidTransitionError con el estado que ganó.

Colaboradores:
    - domain.repositories.ScheduledEmailRepository
    - domain.lifecycle (ensure_transition / StatusTransition)

Notas:
    - El fallo del CAS NUNCA se convierte en overwrite silencioso.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import InvalidTransitionError, NotFoundError
from ....domain.entities import ScheduledEmail
from ....domain.lifecycle import StatusTransition, TransitionTrigger, ensure_transition
from ....domain.repositories import ScheduledEmailRepository


def load_email(repository: ScheduledEmailRepository, email_id: UUID) -> ScheduledEmail:
    email = repository.get_email(email_id)
    if email is None:
        raise NotFoundError(f"Scheduled email {email_id} not found.")
    return email


def apply_transition(
    repository: ScheduledEmailRepository,
    email: ScheduledEmail,
    transition: StatusTransition,
    trigger: TransitionTrigger,
) -> ScheduledEmail:
    """
    Aplica la transición sobre `email` (estado leído previamente).

    Raises:
        InvalidTransitionError: transición ilegal o carrera perdida.
        PersistenceError: store no disponible.
    """
    ensure_transition(email.status, transition.target, trigger)

    updated = repository.transition(email.id, transition)
    if updated is not None:
        return updated

    # Otro escritor cambió el estado entre la lectura y el write.
    current = repository.get_email(email.id)
    if current is None:
        raise NotFoundError(f"Scheduled email {email.id} not found.")
    raise InvalidTransitionError(
        f"Email is already {current.status.value}.",
        current_status=current.status.value,
        target_status=transition.target.value,
    )
