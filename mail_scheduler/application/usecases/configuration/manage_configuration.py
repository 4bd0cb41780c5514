"""
===============================================================================
USE CASES: Delivery Configuration (SMTP)
===============================================================================

Classes:
    - GetDeliveryConfigurationUseCase     get() -> config | None (admin)
    - UpdateDeliveryConfigurationUseCase  set(config): reemplazo completo
    - ProbeDeliveryConfigurationUseCase   probe(config): test de conexión

-------------------------------------------------------------------------------
BUSINESS RULES
-------------------------------------------------------------------------------
R1) Solo admin (MANAGE_CONFIGURATION) lee/escribe/prueba la configuración.
R2) set() valida: host/user/credential no vacíos, puerto en [1, 65535].
R3) set() es un upsert completo sobre id="default" (nunca patch parcial).
R4) Cada set() exitoso audita ConfigurationUpdated (sin la credencial).
R5) probe() no persiste nada, no envía mail y no audita.
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ....audit import AuditRecorder
from ....crosscutting.exceptions import ValidationError
from ....domain.access_policy import Actor, Capability, require_capability
from ....domain.audit import AuditAction
from ....domain.entities import DEFAULT_CONFIGURATION_ID, DeliveryConfiguration
from ....domain.repositories import DeliveryConfigurationRepository
from ....domain.services import ProbeResult, SmtpProbe

logger = logging.getLogger(__name__)

MIN_PORT = 1
MAX_PORT = 65535


def validate_configuration(configuration: DeliveryConfiguration) -> DeliveryConfiguration:
    """Valida y normaliza (strip de host/user). Levanta ValidationError."""
    host = (configuration.smtp_host or "").strip()
    user = (configuration.smtp_user or "").strip()

    if not host:
        raise ValidationError("SMTP host is required.", field="smtp_host")
    if not user:
        raise ValidationError("SMTP user is required.", field="smtp_user")
    if not configuration.smtp_credential:
        raise ValidationError("SMTP credential is required.", field="smtp_credential")

    port = configuration.smtp_port
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValidationError("SMTP port must be an integer.", field="smtp_port")
    if not MIN_PORT <= port <= MAX_PORT:
        raise ValidationError(
            f"SMTP port must be between {MIN_PORT} and {MAX_PORT}.", field="smtp_port"
        )

    return replace(
        configuration,
        smtp_host=host,
        smtp_user=user,
        use_tls=bool(configuration.use_tls),
        id=DEFAULT_CONFIGURATION_ID,
    )


class GetDeliveryConfigurationUseCase:
    def __init__(self, repository: DeliveryConfigurationRepository) -> None:
        self._configurations = repository

    def execute(self, actor: Actor | None) -> Optional[DeliveryConfiguration]:
        require_capability(actor, Capability.MANAGE_CONFIGURATION)
        return self._configurations.get_configuration()


class UpdateDeliveryConfigurationUseCase:
    def __init__(
        self, repository: DeliveryConfigurationRepository, audit: AuditRecorder
    ) -> None:
        self._configurations = repository
        self._audit = audit

    def execute(
        self, configuration: DeliveryConfiguration, actor: Actor | None
    ) -> DeliveryConfiguration:
        checked = require_capability(actor, Capability.MANAGE_CONFIGURATION)
        validated = validate_configuration(configuration)

        saved = self._configurations.save_configuration(validated)

        self._audit.record(
            checked.user_id,
            AuditAction.CONFIGURATION_UPDATED,
            f"User '{checked.user_id}' updated SMTP settings "
            f"({saved.smtp_host}:{saved.smtp_port}, tls={'on' if saved.use_tls else 'off'})",
        )
        logger.info(
            "Delivery configuration updated",
            extra={"smtp_host": saved.smtp_host, "smtp_port": saved.smtp_port},
        )
        return saved


class ProbeDeliveryConfigurationUseCase:
    def __init__(self, probe: SmtpProbe) -> None:
        self._probe = probe

    def execute(
        self, configuration: DeliveryConfiguration, actor: Actor | None
    ) -> ProbeResult:
        require_capability(actor, Capability.MANAGE_CONFIGURATION)
        return self._probe.probe(validate_configuration(configuration))
