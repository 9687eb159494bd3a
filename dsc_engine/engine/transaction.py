"""Atomic scopes and the engine's mutual-exclusion guard."""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from types import TracebackType
from typing import Any, Iterable, Iterator

from ..errors import ReentrantCall
from ..interfaces.stateful import Stateful

logger = logging.getLogger(__name__)


class Transaction:
    """Snapshot every participant on entry; restore all of them on error.

    The exception is always re-raised, so callers observe the failure
    with state exactly as it was before the ``with`` block.
    """

    def __init__(self, participants: Iterable[Stateful], name: str = "tx") -> None:
        self.participants = list(participants)
        self.name = name
        self._snapshots: list[tuple[Stateful, Any]] = []

    def __enter__(self) -> Transaction:
        self._snapshots = [(p, p.snapshot()) for p in self.participants]
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is not None:
            self._rollback()
            logger.warning("Rolled back %s: %s", self.name, exc)
        self._snapshots = []
        return False

    def _rollback(self) -> None:
        for participant, state in self._snapshots:
            participant.restore(state)


class ReentrancyGuard:
    """Serialises engine mutations.

    A thread that re-enters while already holding the guard gets
    ``ReentrantCall``; other threads wait for release. Readers use
    ``read()``, which waits the same way except that the holding thread
    reads through.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._holder: int | None = None

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def read(self) -> Iterator[None]:
        if self._holder == threading.get_ident():
            yield
            return
        with self._lock:
            yield

    def __enter__(self) -> ReentrancyGuard:
        me = threading.get_ident()
        if self._holder == me:
            raise ReentrantCall()
        self._lock.acquire()
        self._holder = me
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self._holder = None
        self._lock.release()
        return False
