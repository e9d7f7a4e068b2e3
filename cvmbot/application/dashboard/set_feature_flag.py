"""
Use case: Flip an operator-controlled feature flag.

Input: SetFeatureFlagCommand (key, value, operator_id)
Output: bool. True when an existing flag was updated.
Side effects: Updates value, updated_by and updated_at of the flag.
Failure cases: Unknown keys and storage failures are reported as False.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import SetFeatureFlagCommand
from cvmbot.domain.dashboard.activation import Clock, utc_now
from cvmbot.domain.dashboard.ports import SystemConfigRepository

logger = logging.getLogger(__name__)


class SetFeatureFlagUseCase:
    def __init__(self, config_repo: SystemConfigRepository, clock: Clock = utc_now) -> None:
        self._config_repo = config_repo
        self._clock = clock

    def execute(self, command: SetFeatureFlagCommand) -> bool:
        logger.info(
            "Setting flag %s=%s by operator=%s",
            command.key,
            command.value,
            command.operator_id,
        )
        try:
            updated = self._config_repo.set_flag(
                command.key, command.value, command.operator_id, self._clock()
            )
        except SQLAlchemyError:
            logger.exception("Failed to set flag %s", command.key)
            return False

        if not updated:
            logger.warning("Flag %s does not exist; nothing updated.", command.key)
        return updated
