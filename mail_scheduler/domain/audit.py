"""
===============================================================================
TARJETA CRC — domain/audit.py
===============================================================================

Módulo:
    Modelos de Auditoría (Dominio)

Responsabilidades:
    - Definir el vocabulario cerrado de acciones (AuditAction).
    - Definir la categoría de presentación de cada acción (AuditCategory),
      resuelta de forma exhaustiva (sin matching por substrings).
    - Definir AuditRecord y el filtro de listado.

Colaboradores:
    - domain.repositories.AuditRecordRepository: persiste y lista registros.
    - mail_scheduler/audit.py: emite registros (orquestación).
    - infra repos: mapean hacia/desde DB.

Notas:
    - Auditoría es append-only (no se edita ni se borra).
    - actor_id es None para acciones del dispatcher sin contexto de usuario.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional
from uuid import UUID


class AuditCategory(str, Enum):
    """Agrupación para filtros/colores en la vista de auditoría."""

    CREATE = "create"
    EDIT = "edit"
    CANCEL = "cancel"
    DELIVERY = "delivery"
    ACCOUNT = "account"


class AuditAction(str, Enum):
    """Vocabulario cerrado de acciones auditadas."""

    CREATED_SCHEDULE = "CreatedSchedule"
    CANCELLED_SCHEDULE = "CancelledSchedule"
    DELIVERED_SCHEDULE = "DeliveredSchedule"
    DELIVERY_FAILED = "DeliveryFailed"
    CONFIGURATION_UPDATED = "ConfigurationUpdated"
    REGISTERED_ACCOUNT = "RegisteredAccount"
    LOGGED_IN = "LoggedIn"

    @property
    def category(self) -> AuditCategory:
        return _ACTION_CATEGORIES[self]


_ACTION_CATEGORIES: dict[AuditAction, AuditCategory] = {
    AuditAction.CREATED_SCHEDULE: AuditCategory.CREATE,
    AuditAction.CANCELLED_SCHEDULE: AuditCategory.CANCEL,
    AuditAction.DELIVERED_SCHEDULE: AuditCategory.DELIVERY,
    AuditAction.DELIVERY_FAILED: AuditCategory.DELIVERY,
    AuditAction.CONFIGURATION_UPDATED: AuditCategory.EDIT,
    AuditAction.REGISTERED_ACCOUNT: AuditCategory.ACCOUNT,
    AuditAction.LOGGED_IN: AuditCategory.ACCOUNT,
}


def actions_in_category(category: AuditCategory) -> FrozenSet[AuditAction]:
    """Acciones que pertenecen a una categoría."""
    return frozenset(a for a, c in _ACTION_CATEGORIES.items() if c == category)


@dataclass(frozen=True, slots=True)
class AuditRecord:
    """Registro inmutable de auditoría."""

    id: UUID
    actor_id: Optional[UUID]
    action: AuditAction
    details: str
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class AuditFilter:
    """
    Filtro de listado.

    - actions: subconjunto de acciones (vacío => todas)
    - actor_id: solo registros de ese actor
    - search: substring case-insensitive sobre details / nombre de acción
    """

    actions: FrozenSet[AuditAction] = field(default_factory=frozenset)
    actor_id: Optional[UUID] = None
    search: Optional[str] = None
