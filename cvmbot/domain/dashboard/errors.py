"""
Domain-specific errors for the dashboard bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.

Storage failures are not domain errors: use cases report them as a
falsy result instead of raising.
"""


class DashboardDomainError(Exception):
    """Base error for all dashboard domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UserNotFoundError(DashboardDomainError):
    """Raised when an operator action targets a user that does not exist."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class InvalidActivationDaysError(DashboardDomainError):
    """Raised when an activation day count is not a positive integer."""

    def __init__(self, days: int) -> None:
        super().__init__(
            f"Invalid activation days: {days}. Must be a positive integer."
        )
        self.days = days


class CapitalAlreadyInvestedError(DashboardDomainError):
    """Raised when a client invests while capital is already placed."""

    def __init__(self, user_id: str, exchange: str) -> None:
        super().__init__(
            f"User {user_id} already has capital invested on {exchange}. "
            "Withdraw before switching."
        )
        self.user_id = user_id
        self.exchange = exchange


class PlanNotFoundError(DashboardDomainError):
    """Raised when a subscription plan cannot be found."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(f"Plan not found: {plan_id}")
        self.plan_id = plan_id
