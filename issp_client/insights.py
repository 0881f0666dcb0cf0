"""
Debounced item-insight lookups.

While an item name is being typed, lookups are coalesced into one
request after a quiet period. Every dispatched lookup takes a sequence
token; a response whose token is no longer the latest is discarded, so
a slow answer for an old name never overwrites a fresher one.
"""

import asyncio
from typing import Awaitable, Callable, Optional, Set

import aiohttp

from issp_client.errors import IsspClientError
from issp_client.models import ItemInsight
from issp_client.utils.logging import get_logger

logger = get_logger()

# Lookup states
IDLE = "idle"
LOADING = "loading"
READY = "ready"
ERROR = "error"

DEFAULT_DEBOUNCE = 0.6


class InsightLookup:
    """
    Insight state for the item currently being composed.

    Args:
        fetch: Coroutine function returning the insight for an item name
        debounce: Quiet period in seconds before a scheduled lookup fires
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[ItemInsight]],
        debounce: float = DEFAULT_DEBOUNCE,
    ):
        self.fetch = fetch
        self.debounce = debounce

        self.state = IDLE
        self.insights: Optional[ItemInsight] = None
        self.error: Optional[str] = None

        self._latest_query = ""
        self._sequence = 0
        self._timer: Optional[asyncio.TimerHandle] = None
        self._pending: Set[asyncio.Task] = set()

    @property
    def latest_query(self) -> str:
        return self._latest_query

    def schedule(self, item_name: Optional[str]) -> None:
        """
        Note a change of the item name.

        Restarts the quiet-period timer; an empty name resets the state to
        idle instead. Must be called from within a running event loop.
        """
        self._cancel_timer()
        trimmed = (item_name or "").strip()
        if not trimmed:
            self.reset()
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce, self._fire, trimmed)

    def _fire(self, item_name: str) -> None:
        self._timer = None
        task = asyncio.ensure_future(self.lookup(item_name))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def reset(self) -> None:
        """Back to idle with no insight and no error."""
        self._cancel_timer()
        # Invalidate any lookup still in flight
        self._sequence += 1
        self.state = IDLE
        self.insights = None
        self.error = None
        self._latest_query = ""

    async def lookup(self, item_name: str, force: bool = False) -> None:
        """
        Fetch insights for an item name now.

        A repeat of the last successful query is skipped unless ``force``.
        """
        trimmed = (item_name or "").strip()
        if not trimmed:
            return
        if not force and trimmed == self._latest_query and self.state == READY:
            return

        self._sequence += 1
        token = self._sequence
        self._latest_query = trimmed
        self.state = LOADING
        self.error = None

        try:
            insights = await self.fetch(trimmed)
        except (IsspClientError, aiohttp.ClientError) as e:
            if token != self._sequence:
                return
            self.state = ERROR
            self.error = str(e) or "Failed to fetch item insights"
            logger.warning(f"Insight lookup for {trimmed!r} failed: {self.error}")
            return

        if token != self._sequence:
            logger.debug(f"Discarding stale insight for {trimmed!r}")
            return
        self.insights = insights
        self.state = READY

    async def retry(self) -> None:
        """Re-dispatch the last query, bypassing de-duplication."""
        if self._latest_query:
            await self.lookup(self._latest_query, force=True)

    async def wait(self) -> None:
        """Wait until no timer is armed and no lookup is in flight."""
        while self._timer is not None or self._pending:
            if self._pending:
                await asyncio.gather(*list(self._pending), return_exceptions=True)
            else:
                await asyncio.sleep(min(self.debounce, 0.05))
