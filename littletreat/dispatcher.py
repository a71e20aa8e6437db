"""Fire-and-forget background work for order log writes."""

from __future__ import annotations

import asyncio
import logging
from itertools import count
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class OrderDispatcher:
    """Runs best-effort jobs off the caller's path.

    Uses APScheduler's AsyncIOScheduler: each dispatched call becomes a
    one-shot job with no run date, so it runs as soon as the event loop is
    free. Failures are logged and never reach the caller. Jobs are tried
    exactly once.
    """

    def __init__(self) -> None:
        """Initialize the dispatcher.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
        except ImportError:
            raise ImportError(
                "apscheduler is required: pip install 'apscheduler>=3.10,<4'"
            )

        self._scheduler = AsyncIOScheduler()
        self._running = False
        self._ids = count(1)
        self._inflight: set[str] = set()

    def start(self) -> None:
        """Start processing jobs; must be called with a running event loop."""
        if not self._running:
            self._scheduler.start()
            self._running = True
            logger.debug("Dispatcher started")

    def stop(self) -> None:
        """Stop the dispatcher without waiting for queued jobs."""
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.debug("Dispatcher stopped")

    @property
    def running(self) -> bool:
        return self._running

    def dispatch(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        name: str = "",
    ) -> str:
        """Queue ``func(*args)`` to run in the background.

        Returns:
            The job id.
        """
        job_id = f"job-{next(self._ids)}"
        self._inflight.add(job_id)
        self._scheduler.add_job(
            self._run,
            trigger="date",
            args=[job_id, func, args, name or job_id],
            id=job_id,
            name=name or job_id,
            misfire_grace_time=None,
        )
        logger.debug("Queued %s (%s)", job_id, name)
        return job_id

    def pending(self) -> list[dict]:
        """Return info about jobs that have not started yet."""
        return [
            {"id": job.id, "name": job.name}
            for job in self._scheduler.get_jobs()
        ]

    @property
    def inflight(self) -> int:
        """Number of dispatched jobs that have not finished."""
        return len(self._inflight)

    async def join(self, timeout: float = 10.0) -> bool:
        """Wait until every dispatched job has finished.

        Returns:
            False if jobs were still running when the timeout expired.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while self._inflight:
            if loop.time() >= deadline:
                logger.warning("%d background jobs still running", len(self._inflight))
                return False
            await asyncio.sleep(0.01)
        return True

    async def _run(self, job_id: str, func, args: tuple, name: str) -> None:
        try:
            result = await func(*args)
            if result is False:
                logger.warning("Background job %s reported failure", name)
        except Exception:
            logger.exception("Background job %s raised", name)
        finally:
            self._inflight.discard(job_id)
