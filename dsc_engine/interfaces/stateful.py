"""Participants of an atomic engine operation."""
from typing import Any, Protocol


class Stateful(Protocol):
    """Anything whose state can be captured and put back."""

    def snapshot(self) -> Any: ...

    def restore(self, state: Any) -> None: ...
