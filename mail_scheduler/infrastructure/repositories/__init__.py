"""
============================================================
TARJETA CRC
============================================================
Class: mail_scheduler.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo)
- Repositorios InMemory (testing / fallback)
============================================================
"""

# ---------------------------
# In-memory implementations
# Usados para tests unitarios rápidos o entornos sin DB.
# ---------------------------
from .in_memory import (
    InMemoryAuditRecordRepository,
    InMemoryDeliveryConfigurationRepository,
    InMemoryScheduledEmailRepository,
    InMemoryUserRepository,
)

# ---------------------------
# Postgres implementations
# ---------------------------
from .postgres import (
    PostgresAuditRecordRepository,
    PostgresDeliveryConfigurationRepository,
    PostgresScheduledEmailRepository,
    PostgresUserRepository,
)

__all__ = [
    # Postgres
    "PostgresAuditRecordRepository",
    "PostgresDeliveryConfigurationRepository",
    "PostgresScheduledEmailRepository",
    "PostgresUserRepository",
    # In-memory
    "InMemoryAuditRecordRepository",
    "InMemoryDeliveryConfigurationRepository",
    "InMemoryScheduledEmailRepository",
    "InMemoryUserRepository",
]
