"""
Domain layer: entities, audit vocabulary, lifecycle state machine, access
policy and ports. No infrastructure imports.
"""

from .access_policy import Actor, Capability, capabilities_for
from .audit import AuditAction, AuditCategory, AuditFilter, AuditRecord
from .entities import DeliveryConfiguration, EmailStatus, ScheduledEmail
from .lifecycle import StatusTransition, TransitionTrigger

__all__ = [
    "Actor",
    "AuditAction",
    "AuditCategory",
    "AuditFilter",
    "AuditRecord",
    "Capability",
    "DeliveryConfiguration",
    "EmailStatus",
    "ScheduledEmail",
    "StatusTransition",
    "TransitionTrigger",
    "capabilities_for",
]
