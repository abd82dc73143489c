"""Life state connectors: the persistence collaborator seen by the host.

The engine itself never stores anything. The host keeps the authoritative
``LifeState`` and moment history behind this protocol and replaces the state
on every moment submission.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lifemirror.domains.twin.domain_logic.moment_models import Moment
    from lifemirror.domains.twin.domain_logic.moment_pipeline import LifeState


@runtime_checkable
class LifeStateStore(Protocol):
    """Abstract interface for the caller-owned state/twin pair and moment list."""

    def get_life_state(self) -> LifeState:
        """Current real health state and both twins."""
        ...

    def save_life_state(self, state: LifeState) -> None:
        """Replace the stored life state."""
        ...

    def add_moment(self, moment: Moment) -> None:
        """Append a moment to the history."""
        ...

    def list_moments(self, limit: int | None = None) -> list[Moment]:
        """Moments ordered newest first, optionally truncated."""
        ...

    def count_moments(self) -> int:
        ...

    @property
    def data_source(self) -> str:
        """Label for the backing store: 'memory', 'demo', ..."""
        ...
