"""
Name: In-Memory Repository Tests

Responsibilities:
  - Conditional transition (compare-and-set) semantics
  - Defensive copies of recipient lists
  - Deterministic ordering and filters aligned with the Postgres adapter
"""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest

from mail_scheduler.domain.entities import DeliveryConfiguration, EmailStatus, ScheduledEmail
from mail_scheduler.domain.lifecycle import cancellation, delivery, delivery_failure
from mail_scheduler.domain.repositories import EmailOrdering
from mail_scheduler.identity.users import User, UserRole
from mail_scheduler.infrastructure.repositories import (
    InMemoryDeliveryConfigurationRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


def _email(owner_id, scheduled_at, **overrides) -> ScheduledEmail:
    data = dict(
        id=uuid4(),
        owner_id=owner_id,
        sender="ana@example.com",
        recipients=["a@x.com"],
        subject="Weekly digest",
        body="<p>Hi</p>",
        scheduled_at=scheduled_at,
    )
    data.update(overrides)
    return ScheduledEmail(**data)


class TestScheduledEmailRepository:
    def test_create_forces_initial_state(self, email_repository, clock):
        owner = uuid4()
        stored = email_repository.create_email(
            _email(owner, clock.now, status=EmailStatus.SENT, error_message="x")
        )
        assert stored.status == EmailStatus.SCHEDULED
        assert stored.error_message is None
        assert stored.created_at == clock.now == stored.updated_at

    def test_transition_applies_once(self, email_repository, clock):
        stored = email_repository.create_email(_email(uuid4(), clock.now))

        first = email_repository.transition(stored.id, cancellation())
        second = email_repository.transition(stored.id, delivery(clock.now))

        assert first.status == EmailStatus.CANCELLED
        assert second is None
        assert email_repository.get_email(stored.id).status == EmailStatus.CANCELLED

    def test_transition_missing_record(self, email_repository):
        assert email_repository.transition(uuid4(), cancellation()) is None

    def test_failure_keeps_reason_and_timestamp(self, email_repository, clock):
        stored = email_repository.create_email(_email(uuid4(), clock.now))
        failed = email_repository.transition(
            stored.id, delivery_failure(clock.now, "mailbox full")
        )
        assert failed.error_message == "mailbox full"
        assert failed.sent_at == clock.now

    def test_returned_lists_are_copies(self, email_repository, clock):
        stored = email_repository.create_email(_email(uuid4(), clock.now))
        stored.recipients.append("intruder@x.com")
        fetched = email_repository.get_email(stored.id)
        fetched.cc.append("cc@x.com")

        again = email_repository.get_email(stored.id)
        assert again.recipients == ["a@x.com"]
        assert again.cc == []

    def test_due_ordering(self, email_repository, clock):
        owner = uuid4()
        later = email_repository.create_email(_email(owner, clock.now - timedelta(minutes=1)))
        earlier = email_repository.create_email(_email(owner, clock.now - timedelta(hours=1)))
        email_repository.create_email(_email(owner, clock.now + timedelta(minutes=1)))
        cancelled = email_repository.create_email(_email(owner, clock.now - timedelta(hours=2)))
        email_repository.transition(cancelled.id, cancellation())

        due = email_repository.list_due(clock.now)

        assert [e.id for e in due] == [earlier.id, later.id]
        assert email_repository.list_due(clock.now, limit=1)[0].id == earlier.id
        assert email_repository.list_due(clock.now, limit=0) == []

    def test_history_newest_first_with_filters(self, email_repository, clock):
        owner, other = uuid4(), uuid4()
        first = email_repository.create_email(_email(owner, clock.now, subject="Invoice"))
        clock.advance(minutes=1)
        second = email_repository.create_email(
            _email(owner, clock.now, recipients=["billing@corp.com"])
        )
        clock.advance(minutes=1)
        email_repository.create_email(_email(other, clock.now, subject="Invoice"))

        mine = email_repository.list_emails(owner_id=owner)
        assert [e.id for e in mine] == [second.id, first.id]

        assert [
            e.id
            for e in email_repository.list_emails(owner_id=owner, search="INVOICE")
        ] == [first.id]
        assert [
            e.id for e in email_repository.list_emails(owner_id=owner, search="billing")
        ] == [second.id]
        assert len(email_repository.list_emails()) == 3
        assert email_repository.list_emails(owner_id=owner, limit=1, offset=1)[0].id == first.id

    def test_status_filter_and_scheduled_ordering(self, email_repository, clock):
        owner = uuid4()
        b = email_repository.create_email(_email(owner, clock.now + timedelta(hours=2)))
        a = email_repository.create_email(_email(owner, clock.now + timedelta(hours=1)))
        c = email_repository.create_email(_email(owner, clock.now + timedelta(hours=3)))
        email_repository.transition(c.id, cancellation())

        pending = email_repository.list_emails(
            owner_id=owner,
            statuses={EmailStatus.SCHEDULED},
            ordering=EmailOrdering.SCHEDULED_AT_ASC,
        )
        assert [e.id for e in pending] == [a.id, b.id]


class TestUserRepository:
    def test_lookup_by_email_is_case_insensitive(self):
        repo = InMemoryUserRepository()
        user = repo.create_user(
            User(id=uuid4(), name="Ana", email="Ana@Example.com", role=UserRole.STANDARD)
        )
        assert user.created_at is not None
        assert repo.get_user_by_email(" ana@example.COM ") == user
        assert repo.get_user(user.id) == user
        assert repo.get_user_by_email("nobody@example.com") is None


class TestDeliveryConfigurationRepository:
    def test_singleton_replace(self):
        repo = InMemoryDeliveryConfigurationRepository()
        assert repo.get_configuration() is None

        first = DeliveryConfiguration("smtp.a.com", 587, "u", "p")
        second = DeliveryConfiguration("smtp.b.com", 465, "v", "q", use_tls=False)
        repo.save_configuration(first)
        repo.save_configuration(second)

        assert repo.get_configuration() == second
