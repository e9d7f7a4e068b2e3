"""
Dependency injection for the dashboard bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the dashboard context; tests
override ``get_db_engine`` and ``get_clock``.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from cvmbot.application.dashboard.assign_basic_plan import AssignBasicPlanUseCase
from cvmbot.application.dashboard.create_plan import CreatePlanUseCase
from cvmbot.application.dashboard.delete_plan import DeletePlanUseCase
from cvmbot.application.dashboard.delete_user import DeleteUserUseCase
from cvmbot.application.dashboard.get_bot_activation import GetBotActivationUseCase
from cvmbot.application.dashboard.get_capital_summary import GetCapitalSummaryUseCase
from cvmbot.application.dashboard.get_feature_flag import GetFeatureFlagUseCase
from cvmbot.application.dashboard.get_user_plan import GetUserPlanUseCase
from cvmbot.application.dashboard.get_users_by_exchange import (
    GetUsersByExchangeUseCase,
)
from cvmbot.application.dashboard.invest_capital import InvestCapitalUseCase
from cvmbot.application.dashboard.list_clients_with_activation import (
    ListClientsWithActivationUseCase,
)
from cvmbot.application.dashboard.list_earnings import ListEarningsUseCase
from cvmbot.application.dashboard.list_plans import ListPlansUseCase
from cvmbot.application.dashboard.set_bot_activation import SetBotActivationUseCase
from cvmbot.application.dashboard.set_feature_flag import SetFeatureFlagUseCase
from cvmbot.application.dashboard.update_plan import UpdatePlanUseCase
from cvmbot.application.dashboard.withdraw_capital import WithdrawCapitalUseCase
from cvmbot.core.config import settings
from cvmbot.domain.dashboard.activation import Clock, utc_now
from cvmbot.domain.dashboard.entities import ResumePolicy
from cvmbot.infrastructure.dashboard.bot_activation_repository import (
    BotActivationRepositoryAdapter,
)
from cvmbot.infrastructure.dashboard.capital_repository import CapitalRepositoryAdapter
from cvmbot.infrastructure.dashboard.plan_repository import PlanRepositoryAdapter
from cvmbot.infrastructure.dashboard.system_config_repository import (
    SystemConfigRepositoryAdapter,
)
from cvmbot.infrastructure.dashboard.user_repository import UserRepositoryAdapter


@lru_cache(maxsize=1)
def get_db_engine() -> Engine:
    """Build the process-wide SQLAlchemy engine from application settings."""
    return create_engine(settings.get_database_url(), pool_pre_ping=True)


def get_clock() -> Clock:
    return utc_now


# ── Bot activation ───────────────────────────────────────────────


def get_set_bot_activation_use_case(
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> SetBotActivationUseCase:
    """Build SetBotActivationUseCase with its infrastructure dependencies."""
    return SetBotActivationUseCase(
        activation_repo=BotActivationRepositoryAdapter(engine),
        user_repo=UserRepositoryAdapter(engine),
        clock=clock,
        policy=ResumePolicy(settings.activation_resume_policy),
        default_days=settings.default_activation_days,
    )


def get_bot_activation_use_case(
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> GetBotActivationUseCase:
    """Build GetBotActivationUseCase with its infrastructure dependencies."""
    return GetBotActivationUseCase(
        activation_repo=BotActivationRepositoryAdapter(engine),
        clock=clock,
        default_days=settings.default_activation_days,
    )


def get_list_clients_use_case(
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> ListClientsWithActivationUseCase:
    """Build ListClientsWithActivationUseCase with its infrastructure dependencies."""
    return ListClientsWithActivationUseCase(
        user_repo=UserRepositoryAdapter(engine),
        activation_repo=BotActivationRepositoryAdapter(engine),
        clock=clock,
    )


def get_delete_user_use_case(
    engine: Engine = Depends(get_db_engine),
) -> DeleteUserUseCase:
    return DeleteUserUseCase(user_repo=UserRepositoryAdapter(engine))


# ── Capital and earnings ─────────────────────────────────────────


def get_capital_summary_use_case(
    engine: Engine = Depends(get_db_engine),
) -> GetCapitalSummaryUseCase:
    return GetCapitalSummaryUseCase(capital_repo=CapitalRepositoryAdapter(engine))


def get_invest_capital_use_case(
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> InvestCapitalUseCase:
    return InvestCapitalUseCase(
        capital_repo=CapitalRepositoryAdapter(engine), clock=clock
    )


def get_withdraw_capital_use_case(
    engine: Engine = Depends(get_db_engine),
) -> WithdrawCapitalUseCase:
    return WithdrawCapitalUseCase(capital_repo=CapitalRepositoryAdapter(engine))


def get_list_earnings_use_case(
    engine: Engine = Depends(get_db_engine),
) -> ListEarningsUseCase:
    return ListEarningsUseCase(capital_repo=CapitalRepositoryAdapter(engine))


def get_users_by_exchange_use_case(
    engine: Engine = Depends(get_db_engine),
) -> GetUsersByExchangeUseCase:
    return GetUsersByExchangeUseCase(capital_repo=CapitalRepositoryAdapter(engine))


# ── Subscription plans ───────────────────────────────────────────


def get_list_plans_use_case(
    engine: Engine = Depends(get_db_engine),
) -> ListPlansUseCase:
    return ListPlansUseCase(plan_repo=PlanRepositoryAdapter(engine))


def get_create_plan_use_case(
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> CreatePlanUseCase:
    return CreatePlanUseCase(plan_repo=PlanRepositoryAdapter(engine), clock=clock)


def get_update_plan_use_case(
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> UpdatePlanUseCase:
    return UpdatePlanUseCase(plan_repo=PlanRepositoryAdapter(engine), clock=clock)


def get_delete_plan_use_case(
    engine: Engine = Depends(get_db_engine),
) -> DeletePlanUseCase:
    return DeletePlanUseCase(plan_repo=PlanRepositoryAdapter(engine))


def get_user_plan_use_case(
    engine: Engine = Depends(get_db_engine),
) -> GetUserPlanUseCase:
    return GetUserPlanUseCase(plan_repo=PlanRepositoryAdapter(engine))


def get_assign_basic_plan_use_case(
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> AssignBasicPlanUseCase:
    """Build AssignBasicPlanUseCase with the configured basic plan name."""
    return AssignBasicPlanUseCase(
        plan_repo=PlanRepositoryAdapter(engine),
        user_repo=UserRepositoryAdapter(engine),
        basic_plan_name=settings.basic_plan_name,
        clock=clock,
    )


# ── System flags ─────────────────────────────────────────────────


def get_feature_flag_use_case(
    engine: Engine = Depends(get_db_engine),
) -> GetFeatureFlagUseCase:
    return GetFeatureFlagUseCase(config_repo=SystemConfigRepositoryAdapter(engine))


def get_set_feature_flag_use_case(
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> SetFeatureFlagUseCase:
    return SetFeatureFlagUseCase(
        config_repo=SystemConfigRepositoryAdapter(engine), clock=clock
    )
