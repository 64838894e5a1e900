"""
Endpoints for realtime streaming.
"""
import asyncio
import json

from fastapi import APIRouter, HTTPException, Request
from sse_starlette.sse import EventSourceResponse

from ....infrastructure.broadcast.state_broadcaster import StateBroadcaster

router = APIRouter(prefix="/intersection")


def get_broadcaster(request: Request) -> StateBroadcaster:
    broadcaster = getattr(request.app.state, "broadcaster", None)
    if broadcaster is None:
        raise HTTPException(503, "Broadcaster not initialized")
    return broadcaster


@router.get("/stream")
async def stream_state(request: Request):
    """
    Server-Sent Events endpoint, one 'state' event per rendered frame.

    Frontend usage:
    ```javascript
    const eventSource = new EventSource('/intersection/stream');
    eventSource.addEventListener('state', (event) => {
        const data = JSON.parse(event.data);
        console.log(data.active_direction, data.phase);
    });
    ```
    """
    broadcaster = get_broadcaster(request)
    queue = await broadcaster.subscribe()

    async def event_generator():
        try:
            while True:
                data = await queue.get()
                yield {
                    "event": "state",
                    "data": json.dumps(data)
                }
        finally:
            await broadcaster.unsubscribe(queue)

    return EventSourceResponse(event_generator())


@router.get("/snapshot")
async def get_snapshot(request: Request):
    """Latest broadcast frame (polling fallback)."""
    broadcaster = get_broadcaster(request)
    if broadcaster.latest_state is None:
        raise HTTPException(404, "No state broadcast yet")
    return broadcaster.latest_state
