"""
Name: Container Wiring Tests

Responsibilities:
  - In-memory adapters selected in the test environment
  - Singletons shared across use cases, cleared by reset_container()
  - End-to-end flow through the composed use cases
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from mail_scheduler import container
from mail_scheduler.application.usecases import CreateScheduledEmailInput, EmailHistoryQuery
from mail_scheduler.domain.audit import AuditAction
from mail_scheduler.domain.entities import EmailStatus
from mail_scheduler.infrastructure.repositories import (
    InMemoryAuditRecordRepository,
    InMemoryScheduledEmailRepository,
)
from mail_scheduler.infrastructure.services import SmtpConnectionProbe

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _fresh_container():
    container.reset_container()
    yield
    container.reset_container()


def test_in_memory_adapters_in_test_env():
    container.startup()
    assert isinstance(container.get_scheduled_email_repository(), InMemoryScheduledEmailRepository)
    assert isinstance(container.get_audit_record_repository(), InMemoryAuditRecordRepository)
    assert isinstance(container.get_smtp_probe(), SmtpConnectionProbe)


def test_singletons_and_reset():
    repo = container.get_scheduled_email_repository()
    assert container.get_scheduled_email_repository() is repo

    container.reset_container()

    assert container.get_scheduled_email_repository() is not repo


def test_schedule_dispatch_and_audit_flow(standard_actor, admin_actor):
    now = datetime.now(timezone.utc)
    created = container.get_create_scheduled_email_use_case().execute(
        CreateScheduledEmailInput(
            sender="ana@example.com",
            recipients="a@x.com; b@y.com",
            subject="Launch notes",
            body="<p>Ready</p>",
            scheduled_at=now + timedelta(minutes=30),
        ),
        standard_actor,
    )

    pending = container.get_list_pending_emails_use_case().execute(standard_actor)
    assert [e.id for e in pending] == [created.id]

    due = container.get_list_due_emails_use_case().execute(now + timedelta(hours=1))
    assert [e.id for e in due] == [created.id]

    container.get_mark_email_sent_use_case().execute(
        created.id, now + timedelta(hours=1)
    )

    history = container.get_list_email_history_use_case().execute(
        admin_actor, EmailHistoryQuery(statuses=frozenset({EmailStatus.SENT}))
    )
    assert [e.id for e in history] == [created.id]
    assert container.get_list_pending_emails_use_case().execute(standard_actor) == []

    records = container.get_list_audit_records_use_case().execute(admin_actor)
    assert [r.action for r in records] == [
        AuditAction.DELIVERED_SCHEDULE,
        AuditAction.CREATED_SCHEDULE,
    ]


def test_shutdown_resets_singletons():
    repo = container.get_audit_record_repository()
    container.shutdown()
    assert container.get_audit_record_repository() is not repo
