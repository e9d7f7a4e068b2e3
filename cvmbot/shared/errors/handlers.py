"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cvmbot.domain.dashboard.errors import (
    CapitalAlreadyInvestedError,
    DashboardDomainError,
    InvalidActivationDaysError,
    PlanNotFoundError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

HTTP_404 = 404
HTTP_409 = 409
HTTP_422 = 422
HTTP_500 = 500


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(UserNotFoundError)
    async def handle_user_not_found(
        _request: Request, exc: UserNotFoundError
    ) -> JSONResponse:
        logger.warning("User not found: %s", exc.user_id)
        return _error_response(HTTP_404, "User not found")

    @app.exception_handler(PlanNotFoundError)
    async def handle_plan_not_found(
        _request: Request, exc: PlanNotFoundError
    ) -> JSONResponse:
        logger.warning("Plan not found: %s", exc.plan_id)
        return _error_response(HTTP_404, "Plan not found")

    @app.exception_handler(InvalidActivationDaysError)
    async def handle_invalid_days(
        _request: Request, exc: InvalidActivationDaysError
    ) -> JSONResponse:
        logger.warning("Invalid activation days: %s", exc.days)
        return _error_response(HTTP_422, "Invalid activation days")

    @app.exception_handler(CapitalAlreadyInvestedError)
    async def handle_capital_already_invested(
        _request: Request, exc: CapitalAlreadyInvestedError
    ) -> JSONResponse:
        logger.warning("Capital already invested: user=%s", exc.user_id)
        return _error_response(
            HTTP_409,
            "Capital already invested",
            "Withdraw the current capital before investing on another exchange.",
        )

    @app.exception_handler(DashboardDomainError)
    async def handle_dashboard_domain(
        _request: Request, exc: DashboardDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled dashboard domain errors."""
        logger.error("Unhandled dashboard domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
