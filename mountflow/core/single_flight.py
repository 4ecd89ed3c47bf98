"""
Single-flight task gate with drop semantics.

While a gated coroutine is suspended, new calls through the same gate are
discarded: they are not queued, and the running call is not restarted.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")


class DropTask:
    def __init__(self, name: str):
        self.name = name
        self._running = False
        self.dropped_count = 0

    @property
    def is_running(self) -> bool:
        return self._running

    async def perform(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> Optional[T]:
        """
        Run ``func`` unless a previous call has not settled yet.

        Returns:
            The coroutine result, or None when the call was dropped.
        """
        # Check-and-set happens before the first await, so it is atomic on the loop
        if self._running:
            self.dropped_count += 1
            logging.debug(f"Task {self.name} already running - call dropped")
            return None

        self._running = True
        try:
            return await func(*args, **kwargs)
        finally:
            self._running = False
