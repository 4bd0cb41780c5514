"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (APP_ENV=test, no .env file)
  - Provide a controllable clock
  - Provide users / actors for both roles
  - Provide in-memory repositories and the audit recorder

Notes:
  - Fixtures are function-scoped for per-test isolation
"""

import os

os.environ.setdefault("APP_ENV", "test")

from datetime import datetime, timedelta, timezone  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402

from mail_scheduler.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from mail_scheduler.application.usecases.scheduling import (  # noqa: E402
    CreateScheduledEmailInput,
    CreateScheduledEmailUseCase,
)
from mail_scheduler.audit import AuditRecorder  # noqa: E402
from mail_scheduler.domain.access_policy import Actor, actor_for  # noqa: E402
from mail_scheduler.identity.users import User, UserRole  # noqa: E402
from mail_scheduler.infrastructure.repositories import (  # noqa: E402
    InMemoryAuditRecordRepository,
    InMemoryDeliveryConfigurationRepository,
    InMemoryScheduledEmailRepository,
    InMemoryUserRepository,
)

BASE_TIME = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Tests against a real PostgreSQL"
    )


class FrozenClock:
    """Reloj controlable: clock() devuelve el instante actual."""

    def __init__(self, start: datetime = BASE_TIME):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


# ============================================================================
# Clock / identities
# ============================================================================


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def standard_user() -> User:
    return User(id=uuid4(), name="Ana", email="ana@example.com", role=UserRole.STANDARD)


@pytest.fixture
def other_user() -> User:
    return User(id=uuid4(), name="Bruno", email="bruno@example.com", role=UserRole.STANDARD)


@pytest.fixture
def admin_user() -> User:
    return User(id=uuid4(), name="Carla", email="carla@example.com", role=UserRole.ADMIN)


@pytest.fixture
def standard_actor(standard_user: User) -> Actor:
    return actor_for(standard_user)


@pytest.fixture
def other_actor(other_user: User) -> Actor:
    return actor_for(other_user)


@pytest.fixture
def admin_actor(admin_user: User) -> Actor:
    return actor_for(admin_user)


# ============================================================================
# Repositories
# ============================================================================


@pytest.fixture
def email_repository(clock: FrozenClock) -> InMemoryScheduledEmailRepository:
    return InMemoryScheduledEmailRepository(clock=clock)


@pytest.fixture
def audit_repository(clock: FrozenClock) -> InMemoryAuditRecordRepository:
    return InMemoryAuditRecordRepository(clock=clock)


@pytest.fixture
def configuration_repository() -> InMemoryDeliveryConfigurationRepository:
    return InMemoryDeliveryConfigurationRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def audit_recorder(audit_repository: InMemoryAuditRecordRepository) -> AuditRecorder:
    return AuditRecorder(audit_repository)


# ============================================================================
# Scheduling helpers
# ============================================================================


@pytest.fixture
def create_email(email_repository, audit_recorder, clock):
    """Use case de creación cableado al reloj controlable."""
    return CreateScheduledEmailUseCase(email_repository, audit_recorder, clock=clock)


@pytest.fixture
def compose(clock):
    """Factory de inputs válidos; kwargs sobreescriben campos."""

    def _compose(**overrides) -> CreateScheduledEmailInput:
        data = dict(
            sender="ana@example.com",
            recipients=["a@x.com"],
            subject="Quarterly report",
            body="<p>Hello</p>",
            scheduled_at=clock.now + timedelta(hours=1),
            cc=None,
        )
        data.update(overrides)
        return CreateScheduledEmailInput(**data)

    return _compose
