"""Bounded asyncio worker pool implementing :class:`WorkerPoolPort`.

A fixed number of worker coroutines drain a bounded queue. The producer
calls :meth:`close` once everything is submitted, and :meth:`join` blocks
until every worker has exited. A failing task is logged and counted;
it never stops its siblings.

Timeouts and :meth:`cancel` reach a task only at its await points, and
:meth:`join` returns after every cancelled task has unwound. Tasks that own
external resources (child processes, partial files) release them on
:class:`asyncio.CancelledError`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional

from slidextract.core.exceptions import WorkerPoolClosedError
from slidextract.ports.outbound.worker_pool_port import PoolReport

logger = logging.getLogger(__name__)

_SENTINEL = object()


class AsyncWorkerPool:
    """Runs submitted coroutine functions on *workers* concurrent workers.

    ``task_timeout`` (seconds) fails any task that runs longer; ``None``
    leaves tasks unbounded.
    """

    def __init__(self, workers: int, task_timeout: Optional[float] = None) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self._workers = workers
        self._task_timeout = task_timeout
        self._queue: Optional[asyncio.Queue] = None
        self._worker_tasks: list[asyncio.Task[None]] = []
        self._tasks: dict[str, dict[str, Any]] = {}
        self._running: dict[str, asyncio.Task[Any]] = {}
        self._report = PoolReport()
        self._closed = False
        self._closing: list[asyncio.Future[None]] = []

    @property
    def workers(self) -> int:
        return self._workers

    # -- lifecycle ---------------------------------------------------------------

    def start(self) -> None:
        """Spawn the worker coroutines in the running event loop."""
        if self._worker_tasks:
            return
        loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue(maxsize=self._workers)
        self._worker_tasks = [
            loop.create_task(self._worker(n), name=f"worker-{n}")
            for n in range(self._workers)
        ]
        logger.debug("Started worker pool with %d workers", self._workers)

    async def submit(
        self,
        task_id: str,
        fn: Callable[..., Coroutine[Any, Any, Any]],
        *args: Any,
    ) -> None:
        """Queue ``fn(*args)``; waits while the queue is full."""
        if self._closed:
            raise WorkerPoolClosedError(f"Cannot submit {task_id!r}: pool is closed")
        if self._queue is None:
            self.start()

        self._tasks[task_id] = {
            "task_id": task_id,
            "status": "PENDING",
            "result": None,
            "error": None,
        }
        self._report.submitted += 1
        await self._queue.put((task_id, fn, args))

    def close(self) -> None:
        """Signal that no more work will be submitted."""
        if self._closed:
            return
        self._closed = True
        if self._queue is None:
            return
        # One sentinel per worker, queued behind any pending work.
        self._closing = [
            asyncio.ensure_future(self._queue.put(_SENTINEL)) for _ in self._worker_tasks
        ]

    async def join(self) -> PoolReport:
        """Wait until every worker has exited and return the tallies."""
        if not self._closed:
            raise RuntimeError("join() called before close()")
        if self._worker_tasks:
            await asyncio.gather(*self._closing, *self._worker_tasks)
        logger.debug(
            "Worker pool drained: %d submitted, %d completed, %d failed, %d cancelled",
            self._report.submitted,
            self._report.completed,
            self._report.failed,
            self._report.cancelled,
        )
        return self._report

    # -- task control ------------------------------------------------------------

    def get_status(self, task_id: str) -> dict:
        info = self._tasks.get(task_id)
        if info is None:
            return {"task_id": task_id, "status": "UNKNOWN"}
        return dict(info)

    def cancel(self, task_id: str) -> bool:
        """Cancel a pending or running task."""
        info = self._tasks.get(task_id)
        if info is None:
            logger.warning("Cannot cancel unknown task %s", task_id)
            return False
        if info["status"] == "PENDING":
            info["status"] = "REVOKED"
            logger.info("Revoked pending task %s", task_id)
            return True
        running = self._running.get(task_id)
        if running is None or running.done():
            logger.debug("Task %s already finished", task_id)
            return False
        running.cancel()
        logger.info("Cancelled running task %s", task_id)
        return True

    # -- internals ---------------------------------------------------------------

    async def _worker(self, n: int) -> None:
        assert self._queue is not None
        while True:
            item = await self._queue.get()
            if item is _SENTINEL:
                return
            task_id, fn, args = item
            await self._run_one(task_id, fn, args)

    async def _run_one(
        self,
        task_id: str,
        fn: Callable[..., Coroutine[Any, Any, Any]],
        args: tuple,
    ) -> None:
        info = self._tasks[task_id]
        if info["status"] == "REVOKED":
            self._report.cancelled += 1
            return

        info["status"] = "STARTED"
        task = asyncio.ensure_future(fn(*args))
        self._running[task_id] = task
        try:
            if self._task_timeout is not None:
                result = await asyncio.wait_for(task, timeout=self._task_timeout)
            else:
                result = await task
        except asyncio.CancelledError:
            if not task.cancelled():
                # The worker itself is being cancelled.
                raise
            info["status"] = "REVOKED"
            self._report.cancelled += 1
            logger.info("Task %s was cancelled", task_id)
        except asyncio.TimeoutError:
            info["status"] = "FAILURE"
            info["error"] = f"timed out after {self._task_timeout}s"
            self._report.failed += 1
            logger.error("Task %s timed out after %.1fs", task_id, self._task_timeout)
        except Exception as exc:
            info["status"] = "FAILURE"
            info["error"] = str(exc)
            self._report.failed += 1
            logger.error("Task %s failed: %s", task_id, exc)
        else:
            info["status"] = "SUCCESS"
            info["result"] = result
            self._report.completed += 1
        finally:
            self._running.pop(task_id, None)
