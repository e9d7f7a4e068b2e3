"""
Use case: Withdraw a client's capital from its exchange.

Input: user_id
Output: bool. True when the store accepted the deletion.
Side effects: Deletes the user's user_capital rows.
Failure cases: Storage failures are reported as False.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.domain.dashboard.ports import CapitalRepository

logger = logging.getLogger(__name__)


class WithdrawCapitalUseCase:
    """Removes the client's capital placement."""

    def __init__(self, capital_repo: CapitalRepository) -> None:
        self._capital_repo = capital_repo

    def execute(self, user_id: UUID) -> bool:
        try:
            removed = self._capital_repo.remove_capital(user_id)
        except SQLAlchemyError:
            logger.exception("Failed to withdraw capital for user=%s", user_id)
            return False
        logger.info("Withdrew capital: user=%s, rows=%d", user_id, removed)
        return True
