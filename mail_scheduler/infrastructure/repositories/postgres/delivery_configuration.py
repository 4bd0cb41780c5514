"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/delivery_configuration.py
============================================================
Class: PostgresDeliveryConfigurationRepository

Responsibilities:
  - Leer la fila singleton (id = 'default') de delivery_configuration.
  - Upsert de reemplazo completo (INSERT ... ON CONFLICT DO UPDATE).

Collaborators:
  - domain.entities.DeliveryConfiguration
  - postgres.base.PostgresRepository
============================================================
"""

from __future__ import annotations

from typing import Optional

from ....domain.entities import DEFAULT_CONFIGURATION_ID, DeliveryConfiguration
from .base import PostgresRepository


class PostgresDeliveryConfigurationRepository(PostgresRepository):
    _SELECT_COLUMNS = "id, smtp_host, smtp_port, smtp_user, smtp_credential, use_tls"

    @staticmethod
    def _row_to_configuration(row: tuple) -> DeliveryConfiguration:
        config_id, host, port, user, credential, use_tls = row
        return DeliveryConfiguration(
            id=config_id,
            smtp_host=host,
            smtp_port=int(port),
            smtp_user=user,
            smtp_credential=credential,
            use_tls=bool(use_tls),
        )

    def get_configuration(self) -> Optional[DeliveryConfiguration]:
        row = self._fetchone(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM delivery_configuration
                WHERE id = %s
            """,
            params=[DEFAULT_CONFIGURATION_ID],
            context_msg="PostgresDeliveryConfigurationRepository: Failed to read configuration",
            extra={},
        )
        return self._row_to_configuration(row) if row else None

    def save_configuration(
        self, configuration: DeliveryConfiguration
    ) -> DeliveryConfiguration:
        row = self._fetchone(
            query=f"""
                INSERT INTO delivery_configuration (
                    id, smtp_host, smtp_port, smtp_user, smtp_credential, use_tls,
                    updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, NOW())
                ON CONFLICT (id) DO UPDATE SET
                    smtp_host = EXCLUDED.smtp_host,
                    smtp_port = EXCLUDED.smtp_port,
                    smtp_user = EXCLUDED.smtp_user,
                    smtp_credential = EXCLUDED.smtp_credential,
                    use_tls = EXCLUDED.use_tls,
                    updated_at = NOW()
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=[
                DEFAULT_CONFIGURATION_ID,
                configuration.smtp_host,
                configuration.smtp_port,
                configuration.smtp_user,
                configuration.smtp_credential,
                configuration.use_tls,
            ],
            context_msg="PostgresDeliveryConfigurationRepository: Failed to save configuration",
            extra={
                "smtp_host": configuration.smtp_host,
                "smtp_port": configuration.smtp_port,
            },
        )
        return self._row_to_configuration(row)
