"""PostgreSQL repository implementations (raw SQL over psycopg)."""

from .audit_record import PostgresAuditRecordRepository
from .delivery_configuration import PostgresDeliveryConfigurationRepository
from .scheduled_email import PostgresScheduledEmailRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresAuditRecordRepository",
    "PostgresDeliveryConfigurationRepository",
    "PostgresScheduledEmailRepository",
    "PostgresUserRepository",
]
