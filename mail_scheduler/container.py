"""
===============================================================================
TARJETA CRC — mail_scheduler/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, clientes externos, casos de uso).
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Centralizar la decisión in-memory vs Postgres basada en Settings.
  - Inicializar / cerrar el pool de conexiones (startup / shutdown).

Colaboradores:
  - mail_scheduler.crosscutting.config.get_settings
  - mail_scheduler.domain.repositories / domain.services (puertos)
  - mail_scheduler.infrastructure.* (implementaciones)
  - mail_scheduler.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Los casos de uso se construyen por llamada (baratos); los repositorios
    y clientes son singletons.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CancelScheduledEmailUseCase,
    CreateScheduledEmailUseCase,
    GetDeliveryConfigurationUseCase,
    GetScheduledEmailUseCase,
    ListAuditRecordsUseCase,
    ListDueEmailsUseCase,
    ListEmailHistoryUseCase,
    ListPendingEmailsUseCase,
    MarkEmailFailedUseCase,
    MarkEmailSentUseCase,
    ProbeDeliveryConfigurationUseCase,
    RegisterAccountUseCase,
    SignInUseCase,
    UpdateDeliveryConfigurationUseCase,
)
from .audit import AuditRecorder
from .crosscutting.config import get_settings
from .crosscutting.logger import logger
from .domain.repositories import (
    AuditRecordRepository,
    DeliveryConfigurationRepository,
    ScheduledEmailRepository,
    UserRepository,
)
from .domain.services import AuthService, SmtpProbe
from .infrastructure.db.pool import close_pool, init_pool
from .infrastructure.repositories import (
    InMemoryAuditRecordRepository,
    InMemoryDeliveryConfigurationRepository,
    InMemoryScheduledEmailRepository,
    InMemoryUserRepository,
    PostgresAuditRecordRepository,
    PostgresDeliveryConfigurationRepository,
    PostgresScheduledEmailRepository,
    PostgresUserRepository,
)
from .infrastructure.services import SmtpConnectionProbe, SupabaseAuthClient


def _use_in_memory() -> bool:
    """
    Regla:
      - app_env ∈ {"test", "testing", "ci"} => in-memory
      - sin database_url => in-memory (desarrollo local)
    """
    settings = get_settings()
    return settings.is_test() or not settings.database_url


# =============================================================================
# Ciclo de vida (pool)
# =============================================================================


def startup() -> None:
    """Inicializa el pool si hay DB configurada."""
    if _use_in_memory():
        logger.info("Using in-memory repositories")
        return

    settings = get_settings()
    init_pool(
        settings.database_url,
        settings.db_pool_min_size,
        settings.db_pool_max_size,
        statement_timeout_ms=settings.db_statement_timeout_ms,
        acquire_timeout_seconds=settings.db_pool_timeout_seconds,
    )


def shutdown() -> None:
    if not _use_in_memory():
        close_pool()
    if get_auth_service.cache_info().currsize:
        auth = get_auth_service()
        if isinstance(auth, SupabaseAuthClient):
            auth.close()
    reset_container()


def reset_container() -> None:
    """Limpia singletons (tests / re-configuración)."""
    for factory in (
        get_scheduled_email_repository,
        get_audit_record_repository,
        get_delivery_configuration_repository,
        get_user_repository,
        get_audit_recorder,
        get_auth_service,
        get_smtp_probe,
    ):
        factory.cache_clear()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_scheduled_email_repository() -> ScheduledEmailRepository:
    if _use_in_memory():
        return InMemoryScheduledEmailRepository()
    return PostgresScheduledEmailRepository()


@lru_cache(maxsize=1)
def get_audit_record_repository() -> AuditRecordRepository:
    if _use_in_memory():
        return InMemoryAuditRecordRepository()
    return PostgresAuditRecordRepository()


@lru_cache(maxsize=1)
def get_delivery_configuration_repository() -> DeliveryConfigurationRepository:
    if _use_in_memory():
        return InMemoryDeliveryConfigurationRepository()
    return PostgresDeliveryConfigurationRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if _use_in_memory():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_audit_recorder() -> AuditRecorder:
    settings = get_settings()
    return AuditRecorder(
        get_audit_record_repository(),
        default_limit=settings.audit_default_limit,
        max_limit=settings.audit_max_limit,
    )


# =============================================================================
# Servicios externos (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    settings = get_settings()
    return SupabaseAuthClient(
        base_url=settings.auth_base_url,
        api_key=settings.auth_api_key,
        timeout_seconds=settings.auth_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_smtp_probe() -> SmtpProbe:
    return SmtpConnectionProbe(
        timeout_seconds=get_settings().smtp_probe_timeout_seconds
    )


# =============================================================================
# Casos de uso: scheduling
# =============================================================================


def get_create_scheduled_email_use_case() -> CreateScheduledEmailUseCase:
    return CreateScheduledEmailUseCase(
        get_scheduled_email_repository(), get_audit_recorder()
    )


def get_cancel_scheduled_email_use_case() -> CancelScheduledEmailUseCase:
    return CancelScheduledEmailUseCase(
        get_scheduled_email_repository(), get_audit_recorder()
    )


def get_mark_email_sent_use_case() -> MarkEmailSentUseCase:
    return MarkEmailSentUseCase(get_scheduled_email_repository(), get_audit_recorder())


def get_mark_email_failed_use_case() -> MarkEmailFailedUseCase:
    return MarkEmailFailedUseCase(
        get_scheduled_email_repository(), get_audit_recorder()
    )


def get_list_due_emails_use_case() -> ListDueEmailsUseCase:
    return ListDueEmailsUseCase(get_scheduled_email_repository())


def get_list_pending_emails_use_case() -> ListPendingEmailsUseCase:
    return ListPendingEmailsUseCase(get_scheduled_email_repository())


def get_list_email_history_use_case() -> ListEmailHistoryUseCase:
    return ListEmailHistoryUseCase(
        get_scheduled_email_repository(),
        default_limit=get_settings().history_default_limit,
    )


def get_get_scheduled_email_use_case() -> GetScheduledEmailUseCase:
    return GetScheduledEmailUseCase(get_scheduled_email_repository())


# =============================================================================
# Casos de uso: auditoría / configuración / cuentas
# =============================================================================


def get_list_audit_records_use_case() -> ListAuditRecordsUseCase:
    return ListAuditRecordsUseCase(get_audit_recorder())


def get_get_delivery_configuration_use_case() -> GetDeliveryConfigurationUseCase:
    return GetDeliveryConfigurationUseCase(get_delivery_configuration_repository())


def get_update_delivery_configuration_use_case() -> UpdateDeliveryConfigurationUseCase:
    return UpdateDeliveryConfigurationUseCase(
        get_delivery_configuration_repository(), get_audit_recorder()
    )


def get_probe_delivery_configuration_use_case() -> ProbeDeliveryConfigurationUseCase:
    return ProbeDeliveryConfigurationUseCase(get_smtp_probe())


def get_register_account_use_case() -> RegisterAccountUseCase:
    return RegisterAccountUseCase(
        get_auth_service(), get_user_repository(), get_audit_recorder()
    )


def get_sign_in_use_case() -> SignInUseCase:
    return SignInUseCase(get_auth_service(), get_user_repository(), get_audit_recorder())
