"""Port for a bounded pool of concurrent workers."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, Protocol, runtime_checkable


@dataclass
class PoolReport:
    submitted: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0


@runtime_checkable
class WorkerPoolPort(Protocol):
    def start(self) -> None: ...
    async def submit(self, task_id: str, fn: Callable[..., Coroutine[Any, Any, Any]], *args: Any) -> None: ...
    def close(self) -> None: ...
    async def join(self) -> PoolReport: ...
    def cancel(self, task_id: str) -> bool: ...
    def get_status(self, task_id: str) -> dict: ...
