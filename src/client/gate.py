"""Latest-request-wins guard for views that reload on every context change."""

import itertools
import logging
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ticket:
    """Issued when a view starts loading for a context."""

    seq: int
    context: Hashable


class ContextGate:
    """
    Decides whether a finished fetch may still update its view.

    Every activation supersedes the previous one. A response whose ticket is
    no longer the latest is stale and must be dropped, even if it arrives
    after the newer response. Requests are never cancelled.
    """

    def __init__(self, name: str = "view"):
        self.name = name
        self._counter = itertools.count(1)
        self._current: Ticket | None = None

    @property
    def current_context(self) -> Hashable | None:
        return self._current.context if self._current else None

    def activate(self, context: Hashable) -> Ticket:
        ticket = Ticket(seq=next(self._counter), context=context)
        self._current = ticket
        return ticket

    def is_current(self, ticket: Ticket) -> bool:
        return self._current is not None and self._current.seq == ticket.seq

    async def run(self, context: Hashable, fetch: Callable[[], Awaitable[T]]) -> T | None:
        """Fetch for `context`; None when a newer activation happened meanwhile."""
        ticket = self.activate(context)
        result = await fetch()
        if not self.is_current(ticket):
            logger.debug(
                "Discarding stale %s response for %r (current: %r)",
                self.name, ticket.context, self.current_context,
            )
            return None
        return result
