"""
Name: Audit Recorder / Audit Log Tests

Responsibilities:
  - Strict append vs best-effort record
  - Newest-first listing with bounded limits
  - Category / actor / search filters
  - Admin-only access
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from mail_scheduler.application.usecases.audit import (
    AuditLogQuery,
    ListAuditRecordsUseCase,
)
from mail_scheduler.audit import AuditRecorder
from mail_scheduler.crosscutting.exceptions import AuthorizationError, PersistenceError
from mail_scheduler.domain.audit import AuditAction, AuditCategory

pytestmark = pytest.mark.unit


class TestAuditRecorder:
    def test_append_stamps_timestamp(self, audit_recorder, clock):
        record = audit_recorder.append(None, AuditAction.DELIVERED_SCHEDULE, "ok")
        assert record.timestamp == clock.now
        assert record.actor_id is None

    def test_append_is_strict(self, audit_recorder, audit_repository):
        audit_repository.available = False
        with pytest.raises(PersistenceError):
            audit_recorder.append(uuid4(), AuditAction.LOGGED_IN, "x")

    def test_record_is_best_effort(self, audit_recorder, audit_repository):
        audit_repository.available = False
        assert audit_recorder.record(uuid4(), AuditAction.LOGGED_IN, "x") is None

    @pytest.mark.parametrize(
        "requested, expected", [(None, 100), (0, 100), (-5, 100), (20, 20), (10_000, 500)]
    )
    def test_effective_limit(self, audit_recorder, requested, expected):
        assert audit_recorder.effective_limit(requested) == expected

    def test_custom_limits(self, audit_repository):
        recorder = AuditRecorder(audit_repository, default_limit=10, max_limit=50)
        assert recorder.effective_limit(None) == 10
        assert recorder.effective_limit(75) == 50


@pytest.fixture
def seeded(audit_recorder, clock, standard_actor, admin_actor):
    audit_recorder.append(standard_actor.user_id, AuditAction.LOGGED_IN, "Ana signed in")
    clock.advance(minutes=1)
    audit_recorder.append(
        standard_actor.user_id, AuditAction.CREATED_SCHEDULE, "scheduled 'Invoice'"
    )
    clock.advance(minutes=1)
    audit_recorder.append(
        admin_actor.user_id, AuditAction.CONFIGURATION_UPDATED, "updated SMTP settings"
    )
    clock.advance(minutes=1)
    audit_recorder.append(None, AuditAction.DELIVERY_FAILED, "failed: SMTP timeout")


class TestListAuditRecords:
    def test_newest_first(self, audit_recorder, seeded, admin_actor):
        records = ListAuditRecordsUseCase(audit_recorder).execute(admin_actor)
        assert [r.action for r in records] == [
            AuditAction.DELIVERY_FAILED,
            AuditAction.CONFIGURATION_UPDATED,
            AuditAction.CREATED_SCHEDULE,
            AuditAction.LOGGED_IN,
        ]

    def test_standard_user_cannot_read(self, audit_recorder, seeded, standard_actor):
        with pytest.raises(AuthorizationError):
            ListAuditRecordsUseCase(audit_recorder).execute(standard_actor)

    def test_limit_and_offset(self, audit_recorder, seeded, admin_actor):
        use_case = ListAuditRecordsUseCase(audit_recorder)
        page = use_case.execute(admin_actor, AuditLogQuery(limit=2, offset=1))
        assert [r.action for r in page] == [
            AuditAction.CONFIGURATION_UPDATED,
            AuditAction.CREATED_SCHEDULE,
        ]

    def test_category_filter(self, audit_recorder, seeded, admin_actor):
        records = ListAuditRecordsUseCase(audit_recorder).execute(
            admin_actor,
            AuditLogQuery(categories=frozenset({AuditCategory.ACCOUNT, AuditCategory.EDIT})),
        )
        assert [r.action for r in records] == [
            AuditAction.CONFIGURATION_UPDATED,
            AuditAction.LOGGED_IN,
        ]

    def test_actor_filter(self, audit_recorder, seeded, admin_actor, standard_actor):
        records = ListAuditRecordsUseCase(audit_recorder).execute(
            admin_actor, AuditLogQuery(actor_id=standard_actor.user_id)
        )
        assert {r.actor_id for r in records} == {standard_actor.user_id}
        assert len(records) == 2

    def test_search_over_details(self, audit_recorder, seeded, admin_actor):
        records = ListAuditRecordsUseCase(audit_recorder).execute(
            admin_actor, AuditLogQuery(search="smtp")
        )
        assert [r.action for r in records] == [
            AuditAction.DELIVERY_FAILED,
            AuditAction.CONFIGURATION_UPDATED,
        ]

    def test_store_unavailable(self, audit_recorder, audit_repository, admin_actor):
        audit_repository.available = False
        with pytest.raises(PersistenceError):
            ListAuditRecordsUseCase(audit_recorder).execute(admin_actor)
