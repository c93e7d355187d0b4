# stayease/services/debounce.py
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

log = logging.getLogger("stayease.debounce")


class Debouncer:
    """
    Collapses a burst of trigger() calls into one run of `action`,
    `delay` seconds after the last trigger.

    - at most one timer is live; each trigger() resets it
    - cancel() drops the timer but leaves an already-started run alone
    - must be used from inside a running event loop
    """

    def __init__(self, delay: float, action: Callable[[], Awaitable[None]]) -> None:
        self.delay = float(delay)
        self.action = action
        self._handle: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def running(self) -> Optional[asyncio.Task]:
        return self._task if self._task is not None and not self._task.done() else None

    def trigger(self) -> None:
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._task = asyncio.ensure_future(self._run())

    async def _run(self) -> None:
        try:
            await self.action()
        except Exception:
            # nobody awaits this task, so log rather than lose the error
            log.exception("debounced action failed")
