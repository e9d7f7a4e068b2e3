"""
Use case: Switch a user's trading bot on or off.

Input: SetBotActivationCommand (user_id, activate, optional days)
Output: bool. True when the new record was written.
Side effects: Upserts the user's bot_activation row.
Failure cases: UserNotFoundError, InvalidActivationDaysError.
    Storage failures are logged and reported as False.
"""

import logging
from functools import partial

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import SetBotActivationCommand
from cvmbot.domain.dashboard.activation import (
    DEFAULT_DURATION_DAYS,
    Clock,
    merge_activation,
    utc_now,
    validate_days,
)
from cvmbot.domain.dashboard.entities import ResumePolicy
from cvmbot.domain.dashboard.errors import UserNotFoundError
from cvmbot.domain.dashboard.ports import BotActivationRepository, UserRepository

logger = logging.getLogger(__name__)


class SetBotActivationUseCase:
    """Orchestrates an operator's activate / pause action.

    The resume and countdown rules live in ``merge_activation``; this
    use case validates the request and hands the merge function to the
    repository's single-transaction upsert.
    """

    def __init__(
        self,
        activation_repo: BotActivationRepository,
        user_repo: UserRepository,
        clock: Clock = utc_now,
        policy: ResumePolicy = ResumePolicy.BANKED_FIRST,
        default_days: int = DEFAULT_DURATION_DAYS,
    ) -> None:
        self._activation_repo = activation_repo
        self._user_repo = user_repo
        self._clock = clock
        self._policy = policy
        self._default_days = default_days

    def execute(self, command: SetBotActivationCommand) -> bool:
        """Run the set-activation use case.

        Args:
            command: Target user, on/off intent and optional day count.

        Returns:
            True if the activation record was persisted.

        Raises:
            UserNotFoundError: If the user does not exist.
            InvalidActivationDaysError: If ``days`` is not positive.
        """
        logger.info(
            "Setting bot activation: user=%s, activate=%s, days=%s",
            command.user_id,
            command.activate,
            command.days,
        )
        if command.activate:
            validate_days(command.days)

        try:
            if not self._user_repo.exists(command.user_id):
                raise UserNotFoundError(str(command.user_id))

            merge = partial(
                merge_activation,
                user_id=command.user_id,
                activate=command.activate,
                now=self._clock(),
                days=command.days,
                policy=self._policy,
                default_days=self._default_days,
            )
            written = self._activation_repo.upsert(command.user_id, merge)
        except SQLAlchemyError:
            logger.exception(
                "Failed to persist bot activation for user=%s", command.user_id
            )
            return False

        logger.info(
            "Bot activation stored: user=%s, is_active=%s, total_days=%d, banked=%s",
            written.user_id,
            written.is_active,
            written.total_duration_days,
            written.paused_days_remaining,
        )
        return True
