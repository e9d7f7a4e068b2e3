"""
Use case: Place a client's capital on an exchange.

Input: InvestCapitalCommand (user_id, exchange, amount)
Output: bool. True when the placement was recorded.
Side effects: Inserts a connected user_capital row.
Failure cases: CapitalAlreadyInvestedError when capital is already
    placed, ValueError for an unknown exchange or non-positive amount.
    Storage failures are reported as False.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import InvestCapitalCommand
from cvmbot.domain.dashboard.activation import Clock, utc_now
from cvmbot.domain.dashboard.entities import Exchange
from cvmbot.domain.dashboard.errors import CapitalAlreadyInvestedError
from cvmbot.domain.dashboard.ports import CapitalRepository

logger = logging.getLogger(__name__)


class InvestCapitalUseCase:
    """A client holds capital on at most one exchange at a time."""

    def __init__(self, capital_repo: CapitalRepository, clock: Clock = utc_now) -> None:
        self._capital_repo = capital_repo
        self._clock = clock

    def execute(self, command: InvestCapitalCommand) -> bool:
        """Run the invest-capital use case.

        Raises:
            CapitalAlreadyInvestedError: If the client already has capital.
            ValueError: If the exchange is unknown or the amount is not positive.
        """
        exchange = Exchange(command.exchange)
        if command.amount <= 0:
            raise ValueError("Investment amount must be positive")

        logger.info(
            "Investing capital: user=%s, exchange=%s", command.user_id, exchange.value
        )
        try:
            existing = self._capital_repo.get_capital(command.user_id)
            if existing is not None:
                raise CapitalAlreadyInvestedError(
                    str(command.user_id), existing.exchange.value
                )
            self._capital_repo.add_capital(
                command.user_id, exchange, command.amount, self._clock()
            )
        except SQLAlchemyError:
            logger.exception("Failed to record capital for user=%s", command.user_id)
            return False
        return True
