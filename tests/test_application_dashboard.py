"""
Tests for the dashboard application layer (use cases).

Tests use cases with mocked ports. No real infrastructure needed.
Each test verifies orchestration and failure mapping; the countdown
rules themselves are covered by the domain tests.
"""

from datetime import timedelta
from decimal import Decimal
from typing import Optional
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import OperationalError

from cvmbot.application.dashboard.assign_basic_plan import AssignBasicPlanUseCase
from cvmbot.application.dashboard.create_plan import CreatePlanUseCase
from cvmbot.application.dashboard.delete_user import DeleteUserUseCase
from cvmbot.application.dashboard.dtos import (
    CreatePlanCommand,
    InvestCapitalCommand,
    SetBotActivationCommand,
    SetFeatureFlagCommand,
    UpdatePlanCommand,
)
from cvmbot.application.dashboard.get_bot_activation import GetBotActivationUseCase
from cvmbot.application.dashboard.get_capital_summary import GetCapitalSummaryUseCase
from cvmbot.application.dashboard.get_feature_flag import GetFeatureFlagUseCase
from cvmbot.application.dashboard.get_users_by_exchange import GetUsersByExchangeUseCase
from cvmbot.application.dashboard.invest_capital import InvestCapitalUseCase
from cvmbot.application.dashboard.list_clients_with_activation import (
    ListClientsWithActivationUseCase,
)
from cvmbot.application.dashboard.set_bot_activation import SetBotActivationUseCase
from cvmbot.application.dashboard.set_feature_flag import SetFeatureFlagUseCase
from cvmbot.application.dashboard.update_plan import UpdatePlanUseCase
from cvmbot.domain.dashboard.entities import (
    BotActivation,
    ClientSummary,
    Exchange,
    ExchangeClient,
    ResumePolicy,
    SubscriptionPlan,
    UserCapital,
)
from cvmbot.domain.dashboard.errors import (
    CapitalAlreadyInvestedError,
    InvalidActivationDaysError,
    PlanNotFoundError,
    UserNotFoundError,
)
from cvmbot.domain.dashboard.ports import (
    BotActivationRepository,
    CapitalRepository,
    PlanRepository,
    SystemConfigRepository,
    UserRepository,
)


def _db_down() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class InMemoryActivationRepository(BotActivationRepository):
    """Dict-backed activation store that applies merges like the real upsert."""

    def __init__(self) -> None:
        self.rows: dict[UUID, BotActivation] = {}

    def get(self, user_id):
        return self.rows.get(user_id)

    def get_many(self, user_ids):
        return {uid: self.rows[uid] for uid in user_ids if uid in self.rows}

    def upsert(self, user_id, merge):
        merged = merge(self.rows.get(user_id))
        self.rows[user_id] = merged
        return merged


def _user_repo(exists: bool = True) -> MagicMock:
    repo = MagicMock(spec=UserRepository)
    repo.exists.return_value = exists
    return repo


class TestSetBotActivationUseCase:
    """Tests for the SetBotActivationUseCase."""

    def _use_case(self, clock, activations, users=None, **kwargs):
        return SetBotActivationUseCase(
            activation_repo=activations,
            user_repo=users or _user_repo(),
            clock=clock,
            **kwargs,
        )

    def test_activate_then_read_reports_full_window(self, clock):
        """Activation followed by a read reports the typed days."""
        activations = InMemoryActivationRepository()
        user_id = uuid4()

        ok = self._use_case(clock, activations).execute(
            SetBotActivationCommand(user_id=user_id, activate=True, days=30)
        )
        result = GetBotActivationUseCase(activations, clock=clock).execute(user_id)

        assert ok is True
        assert result.is_active is True
        assert result.activated_at == clock.now
        assert result.days_remaining == 30

    def test_pause_and_resume_round_trip(self, clock):
        """Days consumed while active are lost, paused days are kept."""
        activations = InMemoryActivationRepository()
        use_case = self._use_case(clock, activations)
        read = GetBotActivationUseCase(activations, clock=clock)
        user_id = uuid4()

        use_case.execute(SetBotActivationCommand(user_id, activate=True, days=30))
        clock.advance(days=10)
        use_case.execute(SetBotActivationCommand(user_id, activate=False))
        clock.advance(days=5)

        paused = read.execute(user_id)
        assert paused.is_active is False
        assert paused.days_remaining == 20
        assert paused.paused_days_remaining == 20

        use_case.execute(SetBotActivationCommand(user_id, activate=True, days=30))
        resumed = read.execute(user_id)
        assert resumed.is_active is True
        assert resumed.days_remaining == 20
        assert resumed.paused_days_remaining is None

    def test_explicit_first_policy_is_forwarded(self, clock):
        """The configured resume policy reaches the merge."""
        activations = InMemoryActivationRepository()
        use_case = self._use_case(
            clock, activations, policy=ResumePolicy.EXPLICIT_FIRST
        )
        user_id = uuid4()

        use_case.execute(SetBotActivationCommand(user_id, activate=True, days=30))
        clock.advance(days=10)
        use_case.execute(SetBotActivationCommand(user_id, activate=False))
        use_case.execute(SetBotActivationCommand(user_id, activate=True, days=45))

        assert activations.rows[user_id].total_duration_days == 45

    def test_unknown_user_raises(self, clock):
        """A missing user is reported, nothing is written."""
        activations = MagicMock(spec=BotActivationRepository)
        use_case = self._use_case(clock, activations, users=_user_repo(exists=False))

        with pytest.raises(UserNotFoundError):
            use_case.execute(SetBotActivationCommand(uuid4(), activate=True, days=30))
        activations.upsert.assert_not_called()

    def test_invalid_days_raise_before_any_io(self, clock):
        """Non-positive days are rejected before touching the store."""
        users = _user_repo()
        activations = MagicMock(spec=BotActivationRepository)
        use_case = self._use_case(clock, activations, users=users)

        with pytest.raises(InvalidActivationDaysError):
            use_case.execute(SetBotActivationCommand(uuid4(), activate=True, days=0))
        users.exists.assert_not_called()
        activations.upsert.assert_not_called()

    def test_invalid_days_ignored_when_pausing(self, clock):
        """Days are irrelevant to a pause."""
        activations = InMemoryActivationRepository()
        use_case = self._use_case(clock, activations)

        assert use_case.execute(SetBotActivationCommand(uuid4(), activate=False, days=0))

    def test_store_failure_returns_false(self, clock):
        """Storage errors become a False result."""
        activations = MagicMock(spec=BotActivationRepository)
        activations.upsert.side_effect = _db_down()

        ok = self._use_case(clock, activations).execute(
            SetBotActivationCommand(uuid4(), activate=True, days=30)
        )

        assert ok is False


class TestGetBotActivationUseCase:
    """Tests for the GetBotActivationUseCase."""

    def test_missing_record_reports_default(self, clock):
        result = GetBotActivationUseCase(
            InMemoryActivationRepository(), clock=clock
        ).execute(uuid4())

        assert result.is_active is False
        assert result.days_remaining == 0
        assert result.total_duration_days == 30
        assert result.activated_at is None

    def test_store_failure_reports_default(self, clock):
        activations = MagicMock(spec=BotActivationRepository)
        activations.get.side_effect = _db_down()

        result = GetBotActivationUseCase(activations, clock=clock).execute(uuid4())

        assert result.is_active is False
        assert result.total_duration_days == 30


class TestListClientsWithActivationUseCase:
    """Tests for the ListClientsWithActivationUseCase."""

    def test_roster_merges_activation(self, clock):
        active_id, idle_id = uuid4(), uuid4()
        users = _user_repo()
        users.list_approved_clients.return_value = [
            ClientSummary(active_id, "a@example.com", "Ana", "Lopez", "ana"),
            ClientSummary(idle_id, "b@example.com", "Beto", "Ruiz", "beto"),
        ]
        activations = InMemoryActivationRepository()
        activations.rows[active_id] = BotActivation(
            user_id=active_id,
            is_active=True,
            activated_at=clock.now - timedelta(days=4),
            total_duration_days=30,
        )

        roster = ListClientsWithActivationUseCase(users, activations, clock).execute()

        assert [c.id for c in roster] == [active_id, idle_id]
        assert roster[0].is_active is True
        assert roster[0].days_remaining == 26
        assert roster[1].is_active is False
        assert roster[1].days_remaining == 0
        assert roster[1].activated_at is None

    def test_store_failure_returns_empty(self, clock):
        users = _user_repo()
        users.list_approved_clients.side_effect = _db_down()

        roster = ListClientsWithActivationUseCase(
            users, InMemoryActivationRepository(), clock
        ).execute()

        assert roster == []


class TestDeleteUserUseCase:
    """Tests for the DeleteUserUseCase."""

    def test_delete_existing_user(self):
        users = _user_repo()
        users.delete_cascade.return_value = True
        user_id = uuid4()

        assert DeleteUserUseCase(users).execute(user_id) is True
        users.delete_cascade.assert_called_once_with(user_id)

    def test_delete_missing_user_raises(self):
        users = _user_repo(exists=False)

        with pytest.raises(UserNotFoundError):
            DeleteUserUseCase(users).execute(uuid4())
        users.delete_cascade.assert_not_called()

    def test_store_failure_returns_false(self):
        users = _user_repo()
        users.delete_cascade.side_effect = _db_down()

        assert DeleteUserUseCase(users).execute(uuid4()) is False


class TestCapitalUseCases:
    """Tests for capital investment and balance."""

    def test_invest_records_capital(self, clock):
        capital = MagicMock(spec=CapitalRepository)
        capital.get_capital.return_value = None
        user_id = uuid4()

        ok = InvestCapitalUseCase(capital, clock).execute(
            InvestCapitalCommand(user_id, "binance", Decimal("500"))
        )

        assert ok is True
        capital.add_capital.assert_called_once_with(
            user_id, Exchange.BINANCE, Decimal("500"), clock.now
        )

    def test_second_investment_conflicts(self, clock):
        user_id = uuid4()
        capital = MagicMock(spec=CapitalRepository)
        capital.get_capital.return_value = UserCapital(
            id=uuid4(),
            user_id=user_id,
            exchange=Exchange.BYBIT,
            capital_amount=Decimal("100"),
            is_connected=True,
            created_at=clock.now,
            updated_at=clock.now,
        )

        with pytest.raises(CapitalAlreadyInvestedError):
            InvestCapitalUseCase(capital, clock).execute(
                InvestCapitalCommand(user_id, "binance", Decimal("500"))
            )
        capital.add_capital.assert_not_called()

    @pytest.mark.parametrize(
        "exchange, amount", [("kraken", Decimal("10")), ("binance", Decimal("0"))]
    )
    def test_invalid_investment_rejected(self, clock, exchange, amount):
        capital = MagicMock(spec=CapitalRepository)

        with pytest.raises(ValueError):
            InvestCapitalUseCase(capital, clock).execute(
                InvestCapitalCommand(uuid4(), exchange, amount)
            )

    def test_balance_is_capital_plus_earnings(self, clock):
        user_id = uuid4()
        capital = MagicMock(spec=CapitalRepository)
        capital.get_capital.return_value = UserCapital(
            id=uuid4(),
            user_id=user_id,
            exchange=Exchange.BLOFIN,
            capital_amount=Decimal("1000.00"),
            is_connected=True,
            created_at=clock.now,
            updated_at=clock.now,
        )
        capital.total_earnings.return_value = Decimal("42.50")

        summary = GetCapitalSummaryUseCase(capital).execute(user_id)

        assert summary.exchange == "blofin"
        assert summary.balance == Decimal("1042.50")

    def test_summary_without_capital_is_zero(self):
        capital = MagicMock(spec=CapitalRepository)
        capital.get_capital.return_value = None
        capital.total_earnings.return_value = Decimal("0")

        summary = GetCapitalSummaryUseCase(capital).execute(uuid4())

        assert summary.exchange is None
        assert summary.is_connected is False
        assert summary.balance == Decimal("0")

    def test_exchange_roster_always_has_every_exchange(self):
        capital = MagicMock(spec=CapitalRepository)
        capital.list_connected_clients.return_value = [
            ExchangeClient(uuid4(), "Ana", "Lopez", "ana", Exchange.BYBIT, Decimal("10"))
        ]

        groups = GetUsersByExchangeUseCase(capital).execute()

        assert set(groups) == {"binance", "blofin", "bybit"}
        assert len(groups["bybit"]) == 1
        assert groups["binance"] == []


def _plan(name: str = "Básico", duration_days: int = 30) -> SubscriptionPlan:
    return SubscriptionPlan(
        id=uuid4(),
        name=name,
        description="",
        price=Decimal("0"),
        duration_days=duration_days,
    )


class TestPlanUseCases:
    """Tests for plan management."""

    def test_create_plan_returns_stored_plan(self, clock):
        plans = MagicMock(spec=PlanRepository)

        result = CreatePlanUseCase(plans, clock).execute(
            CreatePlanCommand(
                name="Pro",
                description="Priority support",
                price=Decimal("49.90"),
                duration_days=90,
                created_by=uuid4(),
                features=["alerts"],
            )
        )

        assert result is not None
        assert result.name == "Pro"
        assert result.features == ["alerts"]
        plans.create_plan.assert_called_once()

    def test_create_plan_rejects_zero_duration(self, clock):
        plans = MagicMock(spec=PlanRepository)

        with pytest.raises(ValueError):
            CreatePlanUseCase(plans, clock).execute(
                CreatePlanCommand("Pro", "", Decimal("1"), 0, uuid4())
            )

    def test_update_unknown_plan_raises(self, clock):
        plans = MagicMock(spec=PlanRepository)
        plans.update_plan.return_value = False

        with pytest.raises(PlanNotFoundError):
            UpdatePlanUseCase(plans, clock).execute(
                UpdatePlanCommand(uuid4(), {"price": Decimal("5")})
            )

    def test_assign_basic_plan_sets_expiry(self, clock):
        plans = MagicMock(spec=PlanRepository)
        plans.get_plan_by_name.return_value = _plan(duration_days=30)
        user_id = uuid4()

        ok = AssignBasicPlanUseCase(plans, _user_repo(), "Básico", clock).execute(user_id)

        assert ok is True
        assigned = plans.assign_plan.call_args.args[0]
        assert assigned.user_id == user_id
        assert assigned.expires_at == clock.now + timedelta(days=30)

    def test_assign_without_basic_plan_returns_false(self, clock):
        plans = MagicMock(spec=PlanRepository)
        plans.get_plan_by_name.return_value = None

        ok = AssignBasicPlanUseCase(plans, _user_repo(), "Básico", clock).execute(uuid4())

        assert ok is False
        plans.assign_plan.assert_not_called()


class TestFeatureFlagUseCases:
    """Tests for system flags."""

    @pytest.mark.parametrize("stored, expected", [(None, True), (False, False), (True, True)])
    def test_flag_defaults_to_enabled(self, stored, expected):
        config = MagicMock(spec=SystemConfigRepository)
        config.get_flag.return_value = stored

        assert GetFeatureFlagUseCase(config).execute("plans_enabled") is expected

    def test_flag_read_failure_defaults_to_enabled(self):
        config = MagicMock(spec=SystemConfigRepository)
        config.get_flag.side_effect = _db_down()

        assert GetFeatureFlagUseCase(config).execute("plans_enabled") is True

    def test_set_flag_forwards_operator(self, clock):
        config = MagicMock(spec=SystemConfigRepository)
        config.set_flag.return_value = True
        operator_id: Optional[UUID] = uuid4()

        ok = SetFeatureFlagUseCase(config, clock).execute(
            SetFeatureFlagCommand("plans_enabled", False, operator_id)
        )

        assert ok is True
        config.set_flag.assert_called_once_with(
            "plans_enabled", False, operator_id, clock.now
        )
