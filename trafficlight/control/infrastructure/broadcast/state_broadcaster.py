import asyncio
import logging
from datetime import datetime
from typing import Optional, Set

from ...domain.entities import IntersectionState
from ....common.schemas.intersection import IntersectionStateSchema

logger = logging.getLogger(__name__)


class StateBroadcaster:
    """
    Pub/sub system that transmits rendered intersection frames to connected clients.
    The controller may publish from any thread; delivery happens on the bound loop.
    """

    def __init__(self, intersection_id: str = "INT-001"):
        self.intersection_id = intersection_id
        self._subscribers: Set[asyncio.Queue] = set()
        self._lock = asyncio.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None

        # Cache latest frame (for new subscribers)
        self._latest_state: Optional[dict] = None

    def bind_loop(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    @property
    def latest_state(self) -> Optional[dict]:
        return self._latest_state

    async def subscribe(self, queue_size: int = 50) -> asyncio.Queue:
        """
        Subscribes a client to state updates.
        Returns an async queue that will receive the frames.
        """
        queue = asyncio.Queue(maxsize=queue_size)

        async with self._lock:
            self._subscribers.add(queue)

        # Send latest known frame immediately
        if self._latest_state is not None:
            try:
                queue.put_nowait(self._latest_state)
            except asyncio.QueueFull:
                pass

        return queue

    async def unsubscribe(self, queue: asyncio.Queue):
        """Removes a subscriber."""
        async with self._lock:
            self._subscribers.discard(queue)

    async def broadcast(self, data: dict):
        """
        Transmits a frame to all subscribers.
        Non-blocking: if a client is slow, it is skipped.
        """
        self._latest_state = data

        async with self._lock:
            subscribers = self._subscribers.copy()

        for queue in subscribers:
            try:
                queue.put_nowait(data)
            except asyncio.QueueFull:
                logger.warning("Skipping slow state subscriber")

    def publish_state(self, state: IntersectionState):
        """
        Controller listener. Safe to call from timer threads.
        """
        data = self.serialize_state(state)
        if self._loop is None or self._loop.is_closed():
            self._latest_state = data
            return
        asyncio.run_coroutine_threadsafe(self.broadcast(data), self._loop)

    def serialize_state(self, state: IntersectionState) -> dict:
        data = IntersectionStateSchema.from_state(self.intersection_id, state).model_dump()
        data["timestamp"] = datetime.now().isoformat()
        return data
