from __future__ import annotations

from typing import Protocol, Sequence

from .model import WorkLog


class WorkLogRepository(Protocol):
    """Owner of the work log collection.

    The collection is append-only apart from ``replace``, which swaps a log for
    its checked-out version at the same position.
    """

    def list_all(self) -> Sequence[WorkLog]:
        raise NotImplementedError

    def append(self, log: WorkLog) -> None:
        raise NotImplementedError

    def replace(self, log: WorkLog) -> bool:
        """Store ``log`` over the entry with the same id; False if the id is unknown."""

        raise NotImplementedError
