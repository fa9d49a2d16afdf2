"""Unit of work protocol."""

from typing import ContextManager, Protocol


class UnitOfWork(Protocol):
    """Groups repository writes into a single atomic unit."""

    def atomic(self) -> ContextManager[None]:
        """Commit everything written inside the block, or nothing."""
        ...
