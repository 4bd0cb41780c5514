"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/audit_record.py
============================================================
Class: PostgresAuditRecordRepository

Responsibilities:
  - Persistir registros de auditoría en PostgreSQL (tabla audit_records).
  - Listar registros con filtros opcionales (acciones, actor, búsqueda).
  - Mantener respuestas determinísticas ("timestamp" DESC, id DESC).

Collaborators:
  - domain.audit.AuditRecord / AuditFilter / AuditAction
  - postgres.base.PostgresRepository

Constraints / Notes:
  - Append-only: no existe UPDATE ni DELETE en este repo.
  - "timestamp" lo asigna la DB (DEFAULT NOW()).
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.audit import AuditAction, AuditFilter, AuditRecord
from .base import PostgresRepository, like_pattern


class PostgresAuditRecordRepository(PostgresRepository):
    """Repositorio PostgreSQL para auditoría (audit_records)."""

    @staticmethod
    def _row_to_record(row: tuple) -> AuditRecord:
        record_id, actor_id, action, details, timestamp = row
        return AuditRecord(
            id=record_id,
            actor_id=actor_id,
            action=AuditAction(action),
            details=details,
            timestamp=timestamp,
        )

    def append(self, record: AuditRecord) -> AuditRecord:
        row = self._fetchone(
            query="""
                INSERT INTO audit_records (id, actor_id, action, details)
                VALUES (%s, %s, %s, %s)
                RETURNING id, actor_id, action, details, "timestamp"
            """,
            params=[
                record.id,
                record.actor_id,
                record.action.value,
                record.details,
            ],
            context_msg="PostgresAuditRecordRepository: Failed to append audit record",
            extra={"record_id": str(record.id), "action": record.action.value},
        )
        return self._row_to_record(row)

    def list_records(
        self,
        audit_filter: Optional[AuditFilter] = None,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> List[AuditRecord]:
        if limit <= 0:
            return []

        audit_filter = audit_filter or AuditFilter()
        conditions: list[str] = []
        params: list[object] = []

        if audit_filter.actions:
            conditions.append("action = ANY(%s)")
            params.append(sorted(a.value for a in audit_filter.actions))

        if audit_filter.actor_id is not None:
            conditions.append("actor_id = %s")
            params.append(audit_filter.actor_id)

        needle = (audit_filter.search or "").strip()
        if needle:
            pattern = like_pattern(needle)
            conditions.append("(details ILIKE %s OR action ILIKE %s)")
            params.extend([pattern, pattern])

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        rows = self._fetchall(
            query=f"""
                SELECT id, actor_id, action, details, "timestamp"
                FROM audit_records
                {where_clause}
                ORDER BY "timestamp" DESC, id DESC
                LIMIT %s OFFSET %s
            """,
            params=[*params, limit, max(offset, 0)],
            context_msg="PostgresAuditRecordRepository: Failed to list audit records",
            extra={
                "actor_id": str(audit_filter.actor_id) if audit_filter.actor_id else None,
                "limit": limit,
                "offset": offset,
            },
        )
        return [self._row_to_record(row) for row in rows]
