"""
Use case: Summarize a client's capital, earnings and balance.

Input: user_id
Output: CapitalSummaryResult
Side effects: None (read-only query).
Failure cases: None. A failing store yields an all-zero summary.
"""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import CapitalSummaryResult
from cvmbot.domain.dashboard.ports import CapitalRepository

logger = logging.getLogger(__name__)


class GetCapitalSummaryUseCase:
    """Computes the balance shown on the client dashboard.

    Balance is invested capital plus every bot earning credited so far.
    """

    def __init__(self, capital_repo: CapitalRepository) -> None:
        self._capital_repo = capital_repo

    def execute(self, user_id: UUID) -> CapitalSummaryResult:
        try:
            capital = self._capital_repo.get_capital(user_id)
            earnings = self._capital_repo.total_earnings(user_id)
        except SQLAlchemyError:
            logger.warning(
                "Capital summary failed for user=%s; reporting zeros.",
                user_id,
                exc_info=True,
            )
            capital, earnings = None, Decimal("0")

        amount = capital.capital_amount if capital else Decimal("0")
        return CapitalSummaryResult(
            user_id=user_id,
            exchange=capital.exchange.value if capital else None,
            is_connected=capital.is_connected if capital else False,
            capital_amount=amount,
            total_earnings=earnings,
            balance=amount + earnings,
        )
