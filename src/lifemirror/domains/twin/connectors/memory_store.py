"""Session-scoped in-memory LifeStateStore."""

from __future__ import annotations

import logging
from typing import Iterable

from lifemirror.domains.twin.domain_logic.moment_models import Moment
from lifemirror.domains.twin.domain_logic.moment_pipeline import LifeState

logger = logging.getLogger(__name__)


class InMemoryLifeStore:
    """LifeStateStore holding one session's state in process memory.

    Starts from the neutral baseline (50 on every metric) unless a seed state
    is given. Nothing survives a restart.
    """

    def __init__(
        self,
        initial_state: LifeState | None = None,
        moments: Iterable[Moment] = (),
        *,
        data_source: str = "memory",
    ) -> None:
        self._state = initial_state or LifeState()
        self._moments: list[Moment] = sorted(moments, key=lambda m: m.timestamp)
        self._data_source = data_source

    def get_life_state(self) -> LifeState:
        return self._state

    def save_life_state(self, state: LifeState) -> None:
        self._state = state

    def add_moment(self, moment: Moment) -> None:
        if self._moments and moment.timestamp < self._moments[-1].timestamp:
            logger.warning(
                "Moment %s is older than the latest stored moment; history order may diverge "
                "from the order it was applied in",
                moment.id,
            )
        self._moments.append(moment)

    def list_moments(self, limit: int | None = None) -> list[Moment]:
        newest_first = sorted(self._moments, key=lambda m: m.timestamp, reverse=True)
        if limit is not None:
            return newest_first[: max(limit, 0)]
        return newest_first

    def count_moments(self) -> int:
        return len(self._moments)

    @property
    def data_source(self) -> str:
        return self._data_source
