"""
Use case: Delete a user and everything the user owns.

Input: user_id
Output: bool. True when the user row was removed.
Side effects: Removes earnings, activation, capital, plan requests,
    plan assignment, sessions and the user row in one transaction.
Failure cases: UserNotFoundError. Storage failures are reported as False.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.domain.dashboard.errors import UserNotFoundError
from cvmbot.domain.dashboard.ports import UserRepository

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """Orchestrates the operator's full removal of a user."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, user_id: UUID) -> bool:
        """Run the delete-user use case.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        logger.info("Deleting user=%s", user_id)
        try:
            if not self._user_repo.exists(user_id):
                raise UserNotFoundError(str(user_id))
            return self._user_repo.delete_cascade(user_id)
        except SQLAlchemyError:
            logger.exception("Failed to delete user=%s", user_id)
            return False
