"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .audit_record import InMemoryAuditRecordRepository
from .delivery_configuration import InMemoryDeliveryConfigurationRepository
from .scheduled_email import InMemoryScheduledEmailRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAuditRecordRepository",
    "InMemoryDeliveryConfigurationRepository",
    "InMemoryScheduledEmailRepository",
    "InMemoryUserRepository",
]
