"""
Use case: List approved clients with their bot activation state.

Input: None
Output: list[ClientActivationResult], newest client first.
Side effects: None (read-only query).
Failure cases: None. A failing store yields an empty list.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import ClientActivationResult
from cvmbot.domain.dashboard.activation import Clock, days_remaining, utc_now
from cvmbot.domain.dashboard.ports import BotActivationRepository, UserRepository

logger = logging.getLogger(__name__)


class ListClientsWithActivationUseCase:
    """Builds the operator's activation roster.

    Activations are loaded in one batch for all listed clients.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        activation_repo: BotActivationRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._user_repo = user_repo
        self._activation_repo = activation_repo
        self._clock = clock

    def execute(self) -> list[ClientActivationResult]:
        try:
            clients = self._user_repo.list_approved_clients()
            activations = self._activation_repo.get_many([c.id for c in clients])
        except SQLAlchemyError:
            logger.warning("Client roster could not be loaded.", exc_info=True)
            return []

        now = self._clock()
        results = []
        for client in clients:
            activation = activations.get(client.id)
            results.append(
                ClientActivationResult(
                    id=client.id,
                    email=client.email,
                    nombre=client.nombre,
                    apellido=client.apellido,
                    nick_telegram=client.nick_telegram,
                    is_active=activation.is_active if activation else False,
                    days_remaining=days_remaining(activation, now) if activation else 0,
                    activated_at=activation.activated_at if activation else None,
                )
            )
        return results
