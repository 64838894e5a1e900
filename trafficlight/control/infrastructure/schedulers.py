"""
Timer services backing the controller's Scheduler protocol.
"""
import asyncio
import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class ThreadTimerHandle:
    def __init__(self, scheduler: "ThreadingScheduler"):
        self._scheduler = scheduler
        self._timer: Optional[threading.Timer] = None
        self._cancelled = False

    def cancel(self):
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        # A cancelled Timer never fires, so it never reaches _fire
        self._scheduler._forget(self)

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler:
    """
    One daemon threading.Timer per scheduled callback.
    Callbacks run on the timer thread, so the receiver must do its own locking.
    """

    def __init__(self):
        self._handles: Set[ThreadTimerHandle] = set()
        self._lock = threading.Lock()

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ThreadTimerHandle:
        handle = ThreadTimerHandle(self)
        timer = threading.Timer(delay_seconds, self._fire, args=(handle, callback))
        timer.name = "SignalTimer"
        timer.daemon = True
        handle._timer = timer

        with self._lock:
            self._handles.add(handle)
        timer.start()
        return handle

    def _forget(self, handle: ThreadTimerHandle):
        with self._lock:
            self._handles.discard(handle)

    def _fire(self, handle: ThreadTimerHandle, callback: Callable[[], None]):
        self._forget(handle)
        if handle.cancelled:
            return
        try:
            callback()
        except Exception as e:
            logger.error(f"Timer callback failed: {e}", exc_info=True)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._handles)

    def shutdown(self):
        """Cancels every outstanding timer."""
        with self._lock:
            handles = list(self._handles)
            self._handles.clear()
        for handle in handles:
            handle.cancel()


def _on_loop(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


class AsyncioTimerHandle:
    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False

    def cancel(self):
        self._cancelled = True
        if self._handle is None:
            return
        if _on_loop(self._loop):
            self._handle.cancel()
        else:
            self._loop.call_soon_threadsafe(self._handle.cancel)

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler:
    """
    Schedules callbacks with loop.call_later.
    Calls from a foreign thread are marshalled onto the loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def bind(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise RuntimeError("AsyncioScheduler is not bound to an event loop") from e
        return self._loop

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> AsyncioTimerHandle:
        loop = self._resolve_loop()
        handle = AsyncioTimerHandle(loop)
        if _on_loop(loop):
            self._arm(handle, delay_seconds, callback)
        else:
            loop.call_soon_threadsafe(self._arm, handle, delay_seconds, callback)
        return handle

    def _arm(self, handle: AsyncioTimerHandle, delay_seconds: float, callback: Callable[[], None]):
        if handle.cancelled:
            return
        handle._handle = handle._loop.call_later(delay_seconds, self._fire, handle, callback)

    @staticmethod
    def _fire(handle: AsyncioTimerHandle, callback: Callable[[], None]):
        if handle.cancelled:
            return
        callback()


class VirtualTimerHandle:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class VirtualClockScheduler:
    """
    Deterministic scheduler on a virtual clock.
    Nothing fires until advance() is called; callbacks due at the same instant
    fire in the order they were armed.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, VirtualTimerHandle]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> VirtualTimerHandle:
        if delay_seconds < 0:
            raise ValueError(f"Delay must be non-negative, got {delay_seconds}")
        handle = VirtualTimerHandle(self._now + delay_seconds, callback)
        heapq.heappush(self._queue, (handle.due, next(self._sequence), handle))
        return handle

    def advance(self, seconds: float):
        """Moves the clock forward, firing everything due on the way."""
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards")
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            handle.callback()
        self._now = target
