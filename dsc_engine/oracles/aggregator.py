"""In-memory round-based price feed."""
from __future__ import annotations

import logging
import time
from typing import Callable

from ..models import RoundData

logger = logging.getLogger(__name__)

_EMPTY_ROUND = RoundData(0, 0, 0, 0, 0)


class PriceAggregator:
    """Keeps every reported round; the latest one is what consumers read.

    Answers are integers in ``decimals`` fixed-point, e.g. ``2000_00000000``
    for $2000 with 8 decimals.
    """

    def __init__(
        self,
        decimals: int,
        initial_answer: int | None,
        description: str = "",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._decimals = decimals
        self.description = description
        self._clock = clock
        self._rounds: dict[int, RoundData] = {}
        self._latest_round = 0
        if initial_answer is not None:
            self.update_answer(initial_answer)

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def latest_round(self) -> int:
        return self._latest_round

    @property
    def latest_answer(self) -> int:
        return self.latest_round_data().answer

    def update_answer(self, answer: int, updated_at: int | None = None) -> RoundData:
        """Record a new round and make it the latest."""
        if updated_at is None:
            updated_at = int(self._clock())
        self._latest_round += 1
        data = RoundData(
            round_id=self._latest_round,
            answer=answer,
            started_at=updated_at,
            updated_at=updated_at,
            answered_in_round=self._latest_round,
        )
        self._rounds[self._latest_round] = data
        logger.debug(
            "Feed %s round %d: answer=%d", self.description, data.round_id, answer
        )
        return data

    def latest_round_data(self) -> RoundData:
        # A feed that never reported reads as an all-zero round.
        return self._rounds.get(self._latest_round, _EMPTY_ROUND)

    def get_round_data(self, round_id: int) -> RoundData:
        try:
            return self._rounds[round_id]
        except KeyError:
            raise KeyError(f"No data for round {round_id}") from None
