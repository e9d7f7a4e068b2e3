"""
Use case: Read an operator-controlled feature flag.

Input: flag key
Output: bool. Unknown keys and store failures read as enabled.
Side effects: None (read-only query).
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.domain.dashboard.ports import SystemConfigRepository

logger = logging.getLogger(__name__)


class GetFeatureFlagUseCase:
    def __init__(self, config_repo: SystemConfigRepository) -> None:
        self._config_repo = config_repo

    def execute(self, key: str) -> bool:
        try:
            value = self._config_repo.get_flag(key)
        except SQLAlchemyError:
            logger.warning("Flag %s could not be read; assuming enabled.", key, exc_info=True)
            return True
        return True if value is None else value
