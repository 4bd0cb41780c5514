# =============================================================================
# FILE: infrastructure/repositories/in_memory/audit_record.py
# =============================================================================
"""
In-Memory Audit Record Repository for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, List, Optional

from ....crosscutting.exceptions import PersistenceError
from ....domain.audit import AuditFilter, AuditRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryAuditRecordRepository:
    """
    In-memory implementation of AuditRecordRepository.

    Useful for:
      - Unit testing
      - Local development without database

    `available=False` simulates an unreachable store (append/list raise
    PersistenceError), to exercise best-effort audit paths.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._lock = Lock()
        self._records: List[AuditRecord] = []
        self._now = clock or _utcnow
        self.available = True

    def _ensure_available(self) -> None:
        if not self.available:
            raise PersistenceError("Audit store unavailable")

    def append(self, record: AuditRecord) -> AuditRecord:
        """Persist an audit record (timestamp assigned here, immutable)."""
        self._ensure_available()
        stored = replace(record, timestamp=record.timestamp or self._now())
        with self._lock:
            self._records.append(stored)
        return stored

    def list_records(
        self,
        audit_filter: Optional[AuditFilter] = None,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> List[AuditRecord]:
        """List records newest-first with filters."""
        self._ensure_available()
        if limit <= 0:
            return []

        audit_filter = audit_filter or AuditFilter()
        with self._lock:
            results = list(self._records)

        if audit_filter.actions:
            results = [r for r in results if r.action in audit_filter.actions]
        if audit_filter.actor_id is not None:
            results = [r for r in results if r.actor_id == audit_filter.actor_id]
        if audit_filter.search:
            needle = audit_filter.search.strip().lower()
            results = [
                r
                for r in results
                if needle in r.details.lower() or needle in r.action.value.lower()
            ]

        # Newest first; equal timestamps keep reverse insertion order (stable sort)
        results.reverse()
        results.sort(key=lambda r: r.timestamp, reverse=True)

        offset = max(offset, 0)
        return results[offset : offset + limit]

    # -------------------------------------------------------------------------
    # Testing helpers
    # -------------------------------------------------------------------------
    def clear(self) -> None:
        """Clear all data (for testing)."""
        with self._lock:
            self._records.clear()

    def get_all_records(self) -> List[AuditRecord]:
        """Get all records in insertion order (for testing)."""
        with self._lock:
            return list(self._records)
