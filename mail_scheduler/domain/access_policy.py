"""
===============================================================================
TARJETA CRC — domain/access_policy.py
===============================================================================

Módulo:
    Política de Acceso (roles, capacidades y scoping por owner)

Responsabilidades:
    - Resolver el rol de un usuario y construir el Actor explícito.
    - Mapear rol -> conjunto de capacidades (función pura, compartida entre
      UI y casos de uso).
    - Decidir lectura/cancelación de emails y el scope de queries.

Colaboradores:
    - identity.users.User, UserRole
    - domain.entities.ScheduledEmail
    - application/usecases: TODA operación guardada recibe un Actor.

Reglas:
    - Admin puede todo.
    - Standard solo sobre emails propios (owner_id == actor.user_id).
    - Standard no lee auditoría ni escribe configuración.
    - Sin actor => AuthorizationError (nunca "default allow").
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional
from uuid import UUID

from ..crosscutting.exceptions import AuthorizationError
from ..identity.users import User, UserRole
from .entities import ScheduledEmail


class Capability(str, Enum):
    """Capacidades que la UI muestra y los casos de uso exigen."""

    COMPOSE_EMAIL = "compose_email"
    VIEW_OWN_EMAILS = "view_own_emails"
    CANCEL_OWN_EMAILS = "cancel_own_emails"
    VIEW_ALL_EMAILS = "view_all_emails"
    CANCEL_ANY_EMAIL = "cancel_any_email"
    VIEW_AUDIT_LOG = "view_audit_log"
    MANAGE_CONFIGURATION = "manage_configuration"


_STANDARD_CAPABILITIES: FrozenSet[Capability] = frozenset(
    {
        Capability.COMPOSE_EMAIL,
        Capability.VIEW_OWN_EMAILS,
        Capability.CANCEL_OWN_EMAILS,
    }
)

_ROLE_CAPABILITIES: dict[UserRole, FrozenSet[Capability]] = {
    UserRole.STANDARD: _STANDARD_CAPABILITIES,
    UserRole.ADMIN: frozenset(Capability),
}


@dataclass(frozen=True, slots=True)
class Actor:
    """Par identidad + rol resuelto, pasado explícito a cada operación."""

    user_id: UUID
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def resolve_role(user: User) -> UserRole:
    """Rol efectivo de un usuario (el perfil es la única fuente)."""
    return UserRole(user.role)


def actor_for(user: User) -> Actor:
    return Actor(user_id=user.id, role=resolve_role(user))


def capabilities_for(role: UserRole) -> FrozenSet[Capability]:
    return _ROLE_CAPABILITIES[role]


def has_capability(actor: Optional[Actor], capability: Capability) -> bool:
    if actor is None:
        return False
    return capability in capabilities_for(actor.role)


def require_actor(actor: Optional[Actor]) -> Actor:
    """Guard clause común: sin identidad no hay operación."""
    if actor is None or actor.user_id is None or actor.role is None:
        raise AuthorizationError("An authenticated actor is required.")
    return actor


def require_capability(actor: Optional[Actor], capability: Capability) -> Actor:
    checked = require_actor(actor)
    if not has_capability(checked, capability):
        raise AuthorizationError(f"Missing capability: {capability.value}.")
    return checked


def owner_scope(actor: Actor) -> Optional[UUID]:
    """
    Filtro de owner obligatorio para queries.

    - Admin => None (sin filtro)
    - Standard => su propio user_id
    """
    if has_capability(actor, Capability.VIEW_ALL_EMAILS):
        return None
    return actor.user_id


def can_read_email(email: ScheduledEmail, actor: Optional[Actor]) -> bool:
    if actor is None:
        return False
    if has_capability(actor, Capability.VIEW_ALL_EMAILS):
        return True
    return email.owner_id == actor.user_id


def can_cancel_email(email: ScheduledEmail, actor: Optional[Actor]) -> bool:
    if actor is None:
        return False
    if has_capability(actor, Capability.CANCEL_ANY_EMAIL):
        return True
    return (
        has_capability(actor, Capability.CANCEL_OWN_EMAILS)
        and email.owner_id == actor.user_id
    )
