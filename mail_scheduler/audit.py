"""
===============================================================================
TARJETA CRC — mail_scheduler/audit.py (Audit Recorder)
===============================================================================

Responsabilidades:
  - Construir registros de auditoría con formato consistente
    (actor_id / action / details).
  - Persistir vía AuditRecordRepository (puerto del dominio).
  - append(): estricto, propaga PersistenceError.
  - record(): “best-effort” para los use cases; si falla la persistencia,
    loguea y NO rompe el flujo de negocio (la mutación ya es la fuente de
    verdad).
  - Listar registros newest-first con límite acotado.

Colaboradores:
  - mail_scheduler.domain.audit.AuditRecord / AuditAction / AuditFilter
  - mail_scheduler.domain.repositories.AuditRecordRepository
  - mail_scheduler.crosscutting.logger.logger

Decisiones:
  - El append ocurre DESPUÉS del write condicional exitoso.
  - details es texto humano; nunca incluye la credencial SMTP.
===============================================================================
"""

from __future__ import annotations

from typing import Callable, List, Optional
from uuid import UUID, uuid4

from .crosscutting.exceptions import PersistenceError
from .crosscutting.logger import logger
from .domain.audit import AuditAction, AuditFilter, AuditRecord
from .domain.repositories import AuditRecordRepository

DEFAULT_LIST_LIMIT = 100
MAX_LIST_LIMIT = 500


class AuditRecorder:
    """Fachada de auditoría usada por todos los casos de uso mutantes."""

    def __init__(
        self,
        repository: AuditRecordRepository,
        *,
        default_limit: int = DEFAULT_LIST_LIMIT,
        max_limit: int = MAX_LIST_LIMIT,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._records = repository
        self._default_limit = default_limit
        self._max_limit = max_limit
        self._new_id = id_factory

    def append(
        self, actor_id: Optional[UUID], action: AuditAction, details: str
    ) -> AuditRecord:
        """
        Agrega un registro.

        Raises:
            PersistenceError: store no disponible o timeout.
        """
        record = AuditRecord(
            id=self._new_id(),
            actor_id=actor_id,
            action=AuditAction(action),
            details=details,
        )
        return self._records.append(record)

    def record(
        self, actor_id: Optional[UUID], action: AuditAction, details: str
    ) -> Optional[AuditRecord]:
        """
        Variante best-effort de append().

        Regla clave:
          - Si falla la escritura, NO se lanza excepción; se loguea warning
            y se devuelve None.
        """
        try:
            return self.append(actor_id, action, details)
        except PersistenceError as exc:
            logger.warning(
                "Falló la escritura del registro de auditoría",
                extra={
                    "action": AuditAction(action).value,
                    "audit_actor_id": str(actor_id) if actor_id else None,
                    "error": exc.message,
                    "error_id": exc.error_id,
                },
            )
            return None

    def effective_limit(self, limit: Optional[int]) -> int:
        """Aplica default y tope al límite pedido por el caller."""
        if limit is None or limit <= 0:
            return self._default_limit
        return min(limit, self._max_limit)

    def list_records(
        self,
        audit_filter: AuditFilter | None = None,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[AuditRecord]:
        """Newest-first, acotado. El scoping por rol lo hace el caso de uso."""
        return self._records.list_records(
            audit_filter or AuditFilter(),
            limit=self.effective_limit(limit),
            offset=max(offset, 0),
        )
