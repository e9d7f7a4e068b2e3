"""
Tests for the bot activation countdown.

Exercises the pure merge and countdown functions in isolation.
No database or infrastructure dependencies.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from cvmbot.domain.dashboard.activation import (
    DEFAULT_DURATION_DAYS,
    days_elapsed,
    days_remaining,
    default_activation,
    merge_activation,
    validate_days,
)
from cvmbot.domain.dashboard.entities import BotActivation, ResumePolicy
from cvmbot.domain.dashboard.errors import InvalidActivationDaysError

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
USER = uuid4()


def _activate(existing, now, days=None, policy=ResumePolicy.BANKED_FIRST):
    return merge_activation(
        existing, user_id=USER, activate=True, now=now, days=days, policy=policy
    )


def _deactivate(existing, now):
    return merge_activation(existing, user_id=USER, activate=False, now=now)


class TestDefaultRecord:
    """A user nobody has activated yet."""

    def test_default_is_inactive_with_thirty_days(self):
        record = default_activation(USER)

        assert record.is_active is False
        assert record.activated_at is None
        assert record.total_duration_days == DEFAULT_DURATION_DAYS == 30
        assert record.paused_days_remaining is None
        assert days_remaining(record, T0) == 0


class TestActivation:
    """Switching the bot on."""

    def test_activate_sets_start_to_now(self):
        record = _activate(None, T0, days=30)

        assert record.is_active is True
        assert record.activated_at == T0
        assert record.total_duration_days == 30
        assert record.paused_days_remaining is None
        assert record.updated_at == T0

    def test_activate_without_days_uses_default(self):
        record = _activate(None, T0)

        assert record.total_duration_days == 30

    def test_active_countdown_drops_by_whole_days(self):
        record = _activate(None, T0, days=30)

        assert days_remaining(record, T0 + timedelta(days=10)) == 20
        # Partial days do not count
        assert days_remaining(record, T0 + timedelta(days=10, hours=23)) == 20

    def test_first_partial_day_keeps_full_total(self):
        record = _activate(None, T0, days=30)

        assert days_remaining(record, T0 + timedelta(hours=23)) == 30

    def test_countdown_never_negative(self):
        record = _activate(None, T0, days=5)

        assert days_remaining(record, T0 + timedelta(days=40)) == 0

    def test_reactivating_active_record_restarts_window(self):
        first = _activate(None, T0, days=30)
        later = T0 + timedelta(days=3)

        second = _activate(first, later, days=10)

        assert second.activated_at == later
        assert second.total_duration_days == 10
        assert second.id == first.id


class TestDeactivation:
    """Pausing the bot banks the remaining days."""

    def test_pause_banks_remaining_days(self):
        active = _activate(None, T0, days=30)
        pause_at = T0 + timedelta(days=10)

        paused = _deactivate(active, pause_at)

        assert paused.is_active is False
        assert paused.activated_at is None
        assert paused.paused_days_remaining == 20
        assert paused.last_pause_date == pause_at
        assert days_remaining(paused, pause_at) == 20

    def test_paused_time_does_not_consume_days(self):
        paused = _deactivate(_activate(None, T0, days=30), T0 + timedelta(days=10))

        assert days_remaining(paused, T0 + timedelta(days=200)) == 20

    def test_pause_after_expiry_banks_zero(self):
        active = _activate(None, T0, days=5)

        paused = _deactivate(active, T0 + timedelta(days=9))

        assert paused.paused_days_remaining == 0

    def test_deactivate_twice_keeps_bank(self):
        paused = _deactivate(_activate(None, T0, days=30), T0 + timedelta(days=10))
        again = _deactivate(paused, T0 + timedelta(days=12))

        assert again.is_active is False
        assert again.paused_days_remaining == 20
        assert again.last_pause_date == paused.last_pause_date
        assert again.updated_at == T0 + timedelta(days=12)

    def test_deactivate_without_record_yields_inactive_default(self):
        record = _deactivate(None, T0)

        assert record.is_active is False
        assert record.total_duration_days == 30
        assert record.paused_days_remaining is None
        assert record.updated_at == T0

    def test_days_ignored_on_deactivation(self):
        active = _activate(None, T0, days=30)

        paused = merge_activation(
            active, user_id=USER, activate=False, now=T0 + timedelta(days=1), days=99
        )

        assert paused.total_duration_days == 30
        assert paused.paused_days_remaining == 29


class TestResume:
    """Reactivating a paused record."""

    def test_banked_days_resume_ignoring_typed_days(self):
        paused = _deactivate(_activate(None, T0, days=30), T0 + timedelta(days=10))
        resume_at = T0 + timedelta(days=15)

        resumed = _activate(paused, resume_at, days=30)

        assert resumed.is_active is True
        assert resumed.activated_at == resume_at
        assert resumed.total_duration_days == 20
        assert resumed.paused_days_remaining is None
        assert days_remaining(resumed, resume_at) == 20

    def test_explicit_days_win_under_explicit_first(self):
        paused = _deactivate(_activate(None, T0, days=30), T0 + timedelta(days=10))

        resumed = _activate(
            paused, T0 + timedelta(days=15), days=45, policy=ResumePolicy.EXPLICIT_FIRST
        )

        assert resumed.total_duration_days == 45

    def test_explicit_first_falls_back_to_bank(self):
        paused = _deactivate(_activate(None, T0, days=30), T0 + timedelta(days=10))

        resumed = _activate(
            paused, T0 + timedelta(days=15), policy=ResumePolicy.EXPLICIT_FIRST
        )

        assert resumed.total_duration_days == 20

    def test_empty_bank_uses_typed_days(self):
        paused = _deactivate(_activate(None, T0, days=5), T0 + timedelta(days=9))

        resumed = _activate(paused, T0 + timedelta(days=10), days=7)

        assert resumed.total_duration_days == 7

    def test_empty_bank_without_days_keeps_previous_total(self):
        paused = _deactivate(_activate(None, T0, days=60), T0 + timedelta(days=61))
        assert paused.paused_days_remaining == 0

        resumed = _activate(paused, T0 + timedelta(days=62))

        assert resumed.total_duration_days == 60
        assert resumed.paused_days_remaining is None

    def test_empty_bank_without_days_keeps_total_under_explicit_first(self):
        paused = _deactivate(_activate(None, T0, days=60), T0 + timedelta(days=61))

        resumed = _activate(
            paused, T0 + timedelta(days=62), policy=ResumePolicy.EXPLICIT_FIRST
        )

        assert resumed.total_duration_days == 60

    def test_multiple_cycles_only_count_active_time(self):
        record = _activate(None, T0, days=30)
        record = _deactivate(record, T0 + timedelta(days=10))
        record = _activate(record, T0 + timedelta(days=15))
        record = _deactivate(record, T0 + timedelta(days=19))

        assert record.paused_days_remaining == 16

        record = _activate(record, T0 + timedelta(days=60))
        assert days_remaining(record, T0 + timedelta(days=66)) == 10


class TestValidation:
    """Day counts must be positive integers."""

    @pytest.mark.parametrize("days", [0, -3, 1.5, "10", True])
    def test_invalid_days_rejected(self, days):
        with pytest.raises(InvalidActivationDaysError):
            validate_days(days)

    def test_invalid_days_rejected_on_activate(self):
        with pytest.raises(InvalidActivationDaysError):
            _activate(None, T0, days=0)

    @pytest.mark.parametrize("days", [None, 1, 30, 365])
    def test_valid_days_accepted(self, days):
        validate_days(days)

    def test_days_elapsed_clamps_clock_skew(self):
        assert days_elapsed(T0, T0 - timedelta(days=2)) == 0

    def test_record_is_immutable(self):
        record = BotActivation(user_id=USER)

        with pytest.raises(AttributeError):
            record.is_active = True
