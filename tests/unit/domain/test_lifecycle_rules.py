"""
Name: Lifecycle State Machine Tests

Responsibilities:
  - Validate the transition table and trigger ownership
  - Validate transition builders (sent_at / error_message patches)
"""

from datetime import datetime, timedelta, timezone

import pytest

from mail_scheduler.crosscutting.exceptions import (
    InvalidTransitionError,
    ValidationError,
)
from mail_scheduler.domain.entities import EmailStatus
from mail_scheduler.domain.lifecycle import (
    TransitionTrigger,
    allowed_targets,
    cancellation,
    delivery,
    delivery_failure,
    ensure_due,
    ensure_transition,
)

pytestmark = pytest.mark.unit

NOW = datetime(2025, 3, 10, 13, 1, tzinfo=timezone.utc)


def test_scheduled_reaches_every_terminal_state():
    assert allowed_targets(EmailStatus.SCHEDULED) == {
        EmailStatus.SENT,
        EmailStatus.FAILED,
        EmailStatus.CANCELLED,
    }


@pytest.mark.parametrize(
    "status", [EmailStatus.SENT, EmailStatus.FAILED, EmailStatus.CANCELLED]
)
def test_terminal_states_have_no_exits(status):
    assert status.is_terminal
    assert allowed_targets(status) == frozenset()
    for target in EmailStatus:
        for trigger in TransitionTrigger:
            with pytest.raises(InvalidTransitionError) as exc_info:
                ensure_transition(status, target, trigger)
            assert exc_info.value.current_status == status.value


def test_user_may_only_cancel():
    ensure_transition(EmailStatus.SCHEDULED, EmailStatus.CANCELLED, TransitionTrigger.USER)

    with pytest.raises(InvalidTransitionError, match="reserved for dispatcher"):
        ensure_transition(EmailStatus.SCHEDULED, EmailStatus.SENT, TransitionTrigger.USER)


def test_dispatcher_cannot_cancel():
    with pytest.raises(InvalidTransitionError):
        ensure_transition(
            EmailStatus.SCHEDULED, EmailStatus.CANCELLED, TransitionTrigger.DISPATCHER
        )


def test_builders_expect_scheduled():
    assert cancellation().expected == EmailStatus.SCHEDULED
    sent = delivery(NOW)
    assert sent.target == EmailStatus.SENT
    assert sent.sent_at == NOW
    assert sent.error_message is None


def test_delivery_requires_due_time():
    ensure_due(NOW, NOW)
    ensure_due(NOW - timedelta(minutes=1), NOW)
    with pytest.raises(InvalidTransitionError, match="not due") as exc_info:
        ensure_due(NOW + timedelta(seconds=1), NOW)
    assert exc_info.value.target_status == "Sent"


def test_delivery_failure_carries_reason():
    failed = delivery_failure(NOW, "  SMTP timeout  ")
    assert failed.target == EmailStatus.FAILED
    assert failed.sent_at == NOW
    assert failed.error_message == "SMTP timeout"


@pytest.mark.parametrize("reason", ["", "   ", None])
def test_delivery_failure_requires_reason(reason):
    with pytest.raises(ValidationError) as exc_info:
        delivery_failure(NOW, reason)
    assert exc_info.value.field == "reason"
