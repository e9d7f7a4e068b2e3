"""
Use case: Group approved clients with connected capital by exchange.

Input: None
Output: dict mapping every exchange name to its clients. Each
    exchange key is present even when it has no clients.
Side effects: None (read-only query).
Failure cases: None. A failing store yields empty groups.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cvmbot.application.dashboard.dtos import ExchangeClientResult
from cvmbot.domain.dashboard.entities import Exchange
from cvmbot.domain.dashboard.ports import CapitalRepository

logger = logging.getLogger(__name__)


class GetUsersByExchangeUseCase:
    def __init__(self, capital_repo: CapitalRepository) -> None:
        self._capital_repo = capital_repo

    def execute(self) -> dict[str, list[ExchangeClientResult]]:
        groups: dict[str, list[ExchangeClientResult]] = {e.value: [] for e in Exchange}
        try:
            clients = self._capital_repo.list_connected_clients()
        except SQLAlchemyError:
            logger.warning("Exchange roster could not be loaded.", exc_info=True)
            return groups

        for client in clients:
            groups[client.exchange.value].append(
                ExchangeClientResult(
                    id=client.id,
                    nombre=client.nombre,
                    apellido=client.apellido,
                    nick_telegram=client.nick_telegram,
                    exchange=client.exchange.value,
                    capital_amount=client.capital_amount,
                )
            )
        return groups
