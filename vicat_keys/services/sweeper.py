"""Background loop that purges expired sessions."""

from __future__ import annotations

import asyncio
import contextlib

from vicat_keys.core.logging import get_logger
from vicat_keys.services.sessions import SessionService

logger = get_logger(__name__)


class SessionSweeper:
    """Run ``SessionService.sweep_expired`` at start-up and then on an interval.

    Each sweep runs in a worker thread and takes the state gateway lock, so it
    never interleaves with a request's read-modify-write cycle. A failed sweep
    is logged and retried on the next tick.

    Usage:
        sweeper = SessionSweeper(sessions, interval_seconds=3600)
        await sweeper.start()
        ...
        await sweeper.stop()
    """

    def __init__(self, sessions: SessionService, interval_seconds: float = 3600.0) -> None:
        self._sessions = sessions
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self._running = False
        # Prevent run_once and the background loop from overlapping
        self._run_lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        """Whether the background loop is running."""
        return self._running

    async def run_once(self) -> int:
        """Run one sweep; returns the number of removed sessions (0 on failure)."""
        async with self._run_lock:
            try:
                return await asyncio.to_thread(self._sessions.sweep_expired)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.exception("Session sweep failed; retrying on next tick")
                return 0

    async def start(self) -> None:
        """Sweep immediately, then keep sweeping in the background."""
        if self._running:
            return
        self._running = True
        await self.run_once()
        self._task = asyncio.create_task(self._loop())
        logger.info("Session sweeper started", extra={"interval_seconds": self._interval})

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to finish."""
        if not self._running:
            return
        self._running = False
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        logger.info("Session sweeper stopped")

    async def _loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            await self.run_once()


__all__ = ["SessionSweeper"]
