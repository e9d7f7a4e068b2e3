"""
Use case: Read a user's bot activation state.

Input: user_id
Output: BotActivationResult with the countdown derived at read time.
Side effects: None (read-only query).
Failure cases: None. A user without a record, or a failing store,
    yields the default inactive state.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import BotActivationResult
from cvmbot.application.dashboard.mappers import activation_to_result
from cvmbot.domain.dashboard.activation import (
    DEFAULT_DURATION_DAYS,
    Clock,
    default_activation,
    utc_now,
)
from cvmbot.domain.dashboard.ports import BotActivationRepository

logger = logging.getLogger(__name__)


class GetBotActivationUseCase:
    """Returns the stored activation or a synthesized default."""

    def __init__(
        self,
        activation_repo: BotActivationRepository,
        clock: Clock = utc_now,
        default_days: int = DEFAULT_DURATION_DAYS,
    ) -> None:
        self._activation_repo = activation_repo
        self._clock = clock
        self._default_days = default_days

    def execute(self, user_id: UUID) -> BotActivationResult:
        """Run the get-activation use case.

        Args:
            user_id: Subject user.

        Returns:
            The user's activation state. Never raises for a missing record.
        """
        try:
            activation = self._activation_repo.get(user_id)
        except SQLAlchemyError:
            logger.warning(
                "Bot activation lookup failed for user=%s; reporting default.",
                user_id,
                exc_info=True,
            )
            activation = None

        if activation is None:
            activation = default_activation(user_id, self._default_days)

        return activation_to_result(activation, self._clock())
