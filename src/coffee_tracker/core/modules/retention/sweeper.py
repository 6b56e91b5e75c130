"""Periodic background sweep of expired entries."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import timedelta

import structlog

from coffee_tracker.core.modules.retention.models import SWEEP_RETRY_DELAY, SweeperState

logger = structlog.get_logger(__name__)


class RetentionSweeper:
    """Runs `sweep` every `interval` in an asyncio task until stopped.

    A failed sweep is logged and retried after `retry_delay`; failures never end the loop.
    Stopping cancels the task, so a pending wait or an in-flight sweep is abandoned at once.
    Sweeps are predicate deletes, so an abandoned one is simply redone on the next tick.
    """

    def __init__(
        self,
        sweep: Callable[[], Awaitable[int]],
        interval: timedelta,
        retry_delay: timedelta = SWEEP_RETRY_DELAY,
    ) -> None:
        self._sweep = sweep
        self._interval = interval
        self._retry_delay = retry_delay
        self._task: asyncio.Task[None] | None = None
        self._state = SweeperState.IDLE
        self.completed_sweeps = 0
        self.failed_sweeps = 0

    @property
    def state(self) -> SweeperState:
        return self._state

    def start(self) -> None:
        if self._state is not SweeperState.IDLE:
            raise RuntimeError(f"Sweeper cannot start from state '{self._state}'")
        self._state = SweeperState.RUNNING
        self._task = asyncio.create_task(self._run(), name="retention-sweeper")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to exit."""
        if self._task is None:
            self._state = SweeperState.STOPPED
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._state = SweeperState.STOPPED

    async def _run(self) -> None:
        logger.info(
            "retention_sweeper_started",
            interval_seconds=self._interval.total_seconds(),
            retry_delay_seconds=self._retry_delay.total_seconds(),
        )
        try:
            while True:
                await asyncio.sleep(self._interval.total_seconds())
                await self._tick()
        finally:
            self._state = SweeperState.STOPPED
            logger.info("retention_sweeper_stopped")

    async def _tick(self) -> None:
        self._state = SweeperState.SWEEPING
        try:
            deleted = await self._sweep()
        except Exception:
            self.failed_sweeps += 1
            logger.exception("retention_sweep_failed", retry_delay_seconds=self._retry_delay.total_seconds())
            await asyncio.sleep(self._retry_delay.total_seconds())
            self._state = SweeperState.RUNNING
            return
        self.completed_sweeps += 1
        self._state = SweeperState.RUNNING
        logger.info("retention_sweep_completed", deleted_count=deleted)
