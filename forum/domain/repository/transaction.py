"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Groups repository writes into one all-or-nothing unit."""

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic unit of work.

        Writes made inside the block are discarded if the block raises.

        Usage:
            async with transactions.atomic():
                await votes.save(vote)
                await posts.save(post)
        """
        pass
