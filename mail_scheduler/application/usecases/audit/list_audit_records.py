"""
===============================================================================
USE CASE: List Audit Records (admin)
===============================================================================

CRC CARD
-------------------------------------------------------------------------------
Class:
    ListAuditRecordsUseCase

Responsibilities:
    - Exigir VIEW_AUDIT_LOG (solo admin).
    - Traducir la consulta (categorías / acciones / actor / búsqueda) a un
      AuditFilter.
    - Devolver registros newest-first con límite acotado (default 100,
      máximo 500).

Collaborators:
    - AuditRecorder.list_records
    - domain.audit.actions_in_category
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional
from uuid import UUID

from ....audit import AuditRecorder
from ....domain.access_policy import Actor, Capability, require_capability
from ....domain.audit import (
    AuditAction,
    AuditCategory,
    AuditFilter,
    AuditRecord,
    actions_in_category,
)


@dataclass(frozen=True)
class AuditLogQuery:
    """
    Consulta de la vista de auditoría.

    categories y actions se combinan por unión; ambos vacíos => todo.
    """

    categories: FrozenSet[AuditCategory] = field(default_factory=frozenset)
    actions: FrozenSet[AuditAction] = field(default_factory=frozenset)
    actor_id: Optional[UUID] = None
    search: Optional[str] = None
    limit: Optional[int] = None
    offset: int = 0

    def to_filter(self) -> AuditFilter:
        selected = set(self.actions)
        for category in self.categories:
            selected |= actions_in_category(category)
        return AuditFilter(
            actions=frozenset(selected),
            actor_id=self.actor_id,
            search=(self.search or "").strip() or None,
        )


class ListAuditRecordsUseCase:
    def __init__(self, audit: AuditRecorder) -> None:
        self._audit = audit

    def execute(
        self, actor: Actor | None, query: AuditLogQuery | None = None
    ) -> List[AuditRecord]:
        require_capability(actor, Capability.VIEW_AUDIT_LOG)
        query = query or AuditLogQuery()
        return self._audit.list_records(
            query.to_filter(), limit=query.limit, offset=query.offset
        )
