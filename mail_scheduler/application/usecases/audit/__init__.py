"""Audit log use cases (admin read side)."""

from .list_audit_records import AuditLogQuery, ListAuditRecordsUseCase

__all__ = ["AuditLogQuery", "ListAuditRecordsUseCase"]
