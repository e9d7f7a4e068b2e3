"""
Use case: List a client's bot earnings.

Input: user_id
Output: list[EarningResult], newest first.
Side effects: None (read-only query).
Failure cases: None. A failing store yields an empty list.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import EarningResult
from cvmbot.domain.dashboard.ports import CapitalRepository

logger = logging.getLogger(__name__)


class ListEarningsUseCase:
    def __init__(self, capital_repo: CapitalRepository) -> None:
        self._capital_repo = capital_repo

    def execute(self, user_id: UUID) -> list[EarningResult]:
        try:
            earnings = self._capital_repo.list_earnings(user_id)
        except SQLAlchemyError:
            logger.warning("Earnings lookup failed for user=%s", user_id, exc_info=True)
            return []

        return [
            EarningResult(id=e.id, amount=e.amount, created_at=e.created_at)
            for e in earnings
        ]
