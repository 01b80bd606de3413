"""Debounced search text.

``DebouncedSearch`` moves through ``IDLE -> PENDING -> COMMITTED``. Every
``update`` cancels the outstanding timer before arming a new one, so a
superseded value is never committed.
"""
from __future__ import annotations

import asyncio
import enum
import inspect
import logging
from typing import Awaitable, Callable, Optional, Set, Union

from .state import SearchState

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.5

CommitCallback = Callable[[str], Union[None, Awaitable[None]]]


class DebounceState(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"


class DebouncedSearch:
    def __init__(self, delay: float = DEFAULT_DELAY, on_commit: Optional[CommitCallback] = None,
                 initial: str = ""):
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.delay = delay
        self.on_commit = on_commit
        self.state = DebounceState.IDLE
        self._raw = initial
        self._debounced = initial
        self._timer: Optional[asyncio.TimerHandle] = None
        self._settled = asyncio.Event()
        self._settled.set()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def raw_text(self) -> str:
        return self._raw

    @property
    def debounced_text(self) -> str:
        return self._debounced

    @property
    def snapshot(self) -> SearchState:
        return SearchState(raw_text=self._raw, debounced_text=self._debounced)

    @property
    def pending(self) -> bool:
        return self.state is DebounceState.PENDING

    def update(self, text: str) -> None:
        """Record a keystroke and restart the quiet period."""
        self._raw = text
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.delay, self._fire)
        self.state = DebounceState.PENDING
        self._settled.clear()

    def cancel(self) -> None:
        """Drop the pending update without committing it."""
        if not self.pending:
            return
        self._cancel_timer()
        self._raw = self._debounced
        self._finish(DebounceState.COMMITTED if self._debounced else DebounceState.IDLE)

    def flush(self) -> None:
        """Commit the pending text now instead of waiting for the timer."""
        if self.pending:
            self._cancel_timer()
            self._fire()

    async def wait(self) -> None:
        """Wait until nothing is pending and commit callbacks have run."""
        await self._settled.wait()
        running = [t for t in self._tasks if not t.done()]
        if running:
            await asyncio.gather(*running)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _finish(self, state: DebounceState) -> None:
        self.state = state
        self._settled.set()

    def _fire(self) -> None:
        self._timer = None
        previous, self._debounced = self._debounced, self._raw
        self._finish(DebounceState.COMMITTED)
        if self._debounced == previous:
            logger.debug("search text unchanged (%r), nothing to commit", self._debounced)
            return
        logger.debug("committing search text %r", self._debounced)
        if self.on_commit is None:
            return
        result = self.on_commit(self._debounced)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
