"""
FastAPI router for the dashboard bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request

from cvmbot.application.dashboard.assign_basic_plan import AssignBasicPlanUseCase
from cvmbot.application.dashboard.create_plan import CreatePlanUseCase
from cvmbot.application.dashboard.delete_plan import DeletePlanUseCase
from cvmbot.application.dashboard.delete_user import DeleteUserUseCase
from cvmbot.application.dashboard.dtos import (
    CreatePlanCommand,
    InvestCapitalCommand,
    PlanResult,
    SetBotActivationCommand,
    SetFeatureFlagCommand,
    UpdatePlanCommand,
)
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
from cvmbot.interfaces.dashboard.dependencies import (
    get_assign_basic_plan_use_case,
    get_bot_activation_use_case,
    get_capital_summary_use_case,
    get_create_plan_use_case,
    get_delete_plan_use_case,
    get_delete_user_use_case,
    get_feature_flag_use_case,
    get_invest_capital_use_case,
    get_list_clients_use_case,
    get_list_earnings_use_case,
    get_list_plans_use_case,
    get_set_bot_activation_use_case,
    get_set_feature_flag_use_case,
    get_update_plan_use_case,
    get_user_plan_use_case,
    get_users_by_exchange_use_case,
    get_withdraw_capital_use_case,
)
from cvmbot.interfaces.dashboard.schemas import (
    FLAG_KEY_PATTERN,
    ActivationResponse,
    CapitalSummaryResponse,
    ClientActivationItem,
    ClientRosterResponse,
    CreatePlanRequest,
    CreatePlanResponse,
    EarningItem,
    EarningsResponse,
    ErrorResponse,
    ExchangeClientItem,
    ExchangeRosterResponse,
    FeatureFlagResponse,
    InvestCapitalRequest,
    PlanItem,
    PlansResponse,
    SetActivationRequest,
    SetFeatureFlagRequest,
    SuccessResponse,
    UpdatePlanRequest,
    UserPlanItem,
    UserPlanResponse,
)
from cvmbot.shared.security.rate_limiting import limiter

router = APIRouter(tags=["dashboard"])


def _plan_item(plan: PlanResult) -> PlanItem:
    return PlanItem(
        id=plan.id,
        name=plan.name,
        description=plan.description,
        price=plan.price,
        duration_days=plan.duration_days,
        features=plan.features,
        is_active=plan.is_active,
        display_order=plan.display_order,
    )


# ── Bot activation ───────────────────────────────────────────────


@router.get(
    "/users/{user_id}/activation",
    response_model=ActivationResponse,
    summary="Get bot activation",
    description="Current activation state with the remaining days derived now.",
)
def get_activation(
    user_id: UUID,
    use_case: GetBotActivationUseCase = Depends(get_bot_activation_use_case),
) -> ActivationResponse:
    """Return a user's activation state; users never activated get defaults."""
    result = use_case.execute(user_id)
    return ActivationResponse(
        user_id=result.user_id,
        is_active=result.is_active,
        activated_at=result.activated_at,
        days_remaining=result.days_remaining,
        total_duration_days=result.total_duration_days,
        paused_days_remaining=result.paused_days_remaining,
        last_pause_date=result.last_pause_date,
    )


@router.put(
    "/users/{user_id}/activation",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Activate or pause the bot",
    description=(
        "Operator action. Activating resumes banked days from the last pause; "
        "pausing banks the days still left."
    ),
)
def set_activation(
    user_id: UUID,
    request: SetActivationRequest,
    use_case: SetBotActivationUseCase = Depends(get_set_bot_activation_use_case),
) -> SuccessResponse:
    command = SetBotActivationCommand(
        user_id=user_id,
        activate=request.activate,
        days=request.days if request.activate else None,
    )
    return SuccessResponse(success=use_case.execute(command))


@router.get(
    "/operator/clients",
    response_model=ClientRosterResponse,
    summary="List clients with activation",
    description="Approved, non-operator users with their bot countdown.",
)
def list_clients(
    use_case: ListClientsWithActivationUseCase = Depends(get_list_clients_use_case),
) -> ClientRosterResponse:
    results = use_case.execute()
    return ClientRosterResponse(
        clients=[
            ClientActivationItem(
                id=r.id,
                email=r.email,
                nombre=r.nombre,
                apellido=r.apellido,
                nick_telegram=r.nick_telegram,
                is_active=r.is_active,
                days_remaining=r.days_remaining,
                activated_at=r.activated_at,
            )
            for r in results
        ]
    )


@router.delete(
    "/users/{user_id}",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a user",
    description="Removes the user with its capital, earnings, activation and plan.",
)
@limiter.limit(settings.rate_limit_heavy)
def delete_user(
    request: Request,
    user_id: UUID,
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
) -> SuccessResponse:
    return SuccessResponse(success=use_case.execute(user_id))


# ── Capital and earnings ─────────────────────────────────────────


@router.get(
    "/users/{user_id}/capital",
    response_model=CapitalSummaryResponse,
    summary="Get capital summary",
    description="Invested capital, total bot earnings and resulting balance.",
)
def get_capital(
    user_id: UUID,
    use_case: GetCapitalSummaryUseCase = Depends(get_capital_summary_use_case),
) -> CapitalSummaryResponse:
    result = use_case.execute(user_id)
    return CapitalSummaryResponse(
        user_id=result.user_id,
        exchange=result.exchange,
        is_connected=result.is_connected,
        capital_amount=result.capital_amount,
        total_earnings=result.total_earnings,
        balance=result.balance,
    )


@router.post(
    "/users/{user_id}/capital",
    response_model=SuccessResponse,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Invest capital",
    description="Place capital on one exchange. Only one placement per user.",
)
def invest_capital(
    user_id: UUID,
    request: InvestCapitalRequest,
    use_case: InvestCapitalUseCase = Depends(get_invest_capital_use_case),
) -> SuccessResponse:
    command = InvestCapitalCommand(
        user_id=user_id, exchange=request.exchange, amount=request.amount
    )
    return SuccessResponse(success=use_case.execute(command))


@router.delete(
    "/users/{user_id}/capital",
    response_model=SuccessResponse,
    summary="Withdraw capital",
)
def withdraw_capital(
    user_id: UUID,
    use_case: WithdrawCapitalUseCase = Depends(get_withdraw_capital_use_case),
) -> SuccessResponse:
    return SuccessResponse(success=use_case.execute(user_id))


@router.get(
    "/users/{user_id}/earnings",
    response_model=EarningsResponse,
    summary="List bot earnings",
)
def list_earnings(
    user_id: UUID,
    use_case: ListEarningsUseCase = Depends(get_list_earnings_use_case),
) -> EarningsResponse:
    results = use_case.execute(user_id)
    return EarningsResponse(
        earnings=[
            EarningItem(id=r.id, amount=r.amount, created_at=r.created_at)
            for r in results
        ]
    )


@router.get(
    "/operator/exchanges",
    response_model=ExchangeRosterResponse,
    summary="Clients grouped by exchange",
    description="Approved clients with connected capital, per exchange.",
)
def users_by_exchange(
    use_case: GetUsersByExchangeUseCase = Depends(get_users_by_exchange_use_case),
) -> ExchangeRosterResponse:
    groups = use_case.execute()
    return ExchangeRosterResponse(
        **{
            exchange: [
                ExchangeClientItem(
                    id=c.id,
                    nombre=c.nombre,
                    apellido=c.apellido,
                    nick_telegram=c.nick_telegram,
                    exchange=c.exchange,
                    capital_amount=c.capital_amount,
                )
                for c in clients
            ]
            for exchange, clients in groups.items()
        }
    )


# ── Subscription plans ───────────────────────────────────────────


@router.get(
    "/plans",
    response_model=PlansResponse,
    summary="List subscription plans",
)
def list_plans(
    active_only: bool = True,
    use_case: ListPlansUseCase = Depends(get_list_plans_use_case),
) -> PlansResponse:
    return PlansResponse(plans=[_plan_item(p) for p in use_case.execute(active_only)])


@router.post(
    "/plans",
    response_model=CreatePlanResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Create a subscription plan",
)
def create_plan(
    request: CreatePlanRequest,
    use_case: CreatePlanUseCase = Depends(get_create_plan_use_case),
) -> CreatePlanResponse:
    command = CreatePlanCommand(
        name=request.name,
        description=request.description,
        price=request.price,
        duration_days=request.duration_days,
        created_by=request.created_by,
        features=request.features,
        display_order=request.display_order,
    )
    result = use_case.execute(command)
    if result is None:
        return CreatePlanResponse(success=False)
    return CreatePlanResponse(success=True, plan=_plan_item(result))


@router.patch(
    "/plans/{plan_id}",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update a subscription plan",
)
def update_plan(
    plan_id: UUID,
    request: UpdatePlanRequest,
    use_case: UpdatePlanUseCase = Depends(get_update_plan_use_case),
) -> SuccessResponse:
    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    command = UpdatePlanCommand(plan_id=plan_id, changes=changes)
    return SuccessResponse(success=use_case.execute(command))


@router.delete(
    "/plans/{plan_id}",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a subscription plan",
)
def delete_plan(
    plan_id: UUID,
    use_case: DeletePlanUseCase = Depends(get_delete_plan_use_case),
) -> SuccessResponse:
    return SuccessResponse(success=use_case.execute(plan_id))


@router.get(
    "/users/{user_id}/plan",
    response_model=UserPlanResponse,
    summary="Get a client's plan",
)
def get_user_plan(
    user_id: UUID,
    use_case: GetUserPlanUseCase = Depends(get_user_plan_use_case),
) -> UserPlanResponse:
    result = use_case.execute(user_id)
    if result is None:
        return UserPlanResponse(user_id=user_id, user_plan=None)
    return UserPlanResponse(
        user_id=user_id,
        user_plan=UserPlanItem(
            plan_id=result.plan_id,
            activated_at=result.activated_at,
            expires_at=result.expires_at,
            is_active=result.is_active,
            plan=_plan_item(result.plan) if result.plan else None,
        ),
    )


@router.post(
    "/users/{user_id}/plan/basic",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Assign the basic plan",
)
def assign_basic_plan(
    user_id: UUID,
    use_case: AssignBasicPlanUseCase = Depends(get_assign_basic_plan_use_case),
) -> SuccessResponse:
    return SuccessResponse(success=use_case.execute(user_id))


# ── System flags ─────────────────────────────────────────────────


@router.get(
    "/config/{key}",
    response_model=FeatureFlagResponse,
    summary="Read a feature flag",
    description="Unknown flags read as enabled.",
)
def get_feature_flag(
    key: str = Path(..., pattern=FLAG_KEY_PATTERN),
    use_case: GetFeatureFlagUseCase = Depends(get_feature_flag_use_case),
) -> FeatureFlagResponse:
    return FeatureFlagResponse(key=key, value=use_case.execute(key))


@router.put(
    "/config/{key}",
    response_model=SuccessResponse,
    summary="Set a feature flag",
)
def set_feature_flag(
    request: SetFeatureFlagRequest,
    key: str = Path(..., pattern=FLAG_KEY_PATTERN),
    use_case: SetFeatureFlagUseCase = Depends(get_set_feature_flag_use_case),
) -> SuccessResponse:
    command = SetFeatureFlagCommand(
        key=key, value=request.value, operator_id=request.operator_id
    )
    return SuccessResponse(success=use_case.execute(command))
