"""
API package.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import intersection, streaming
from ...application.controller import IntersectionController
from ...infrastructure.broadcast.state_broadcaster import StateBroadcaster
from ...infrastructure.schedulers import AsyncioScheduler


def create_app(
    controller: IntersectionController,
    broadcaster: Optional[StateBroadcaster] = None,
    start_auto_mode: bool = False
) -> FastAPI:
    """
    Builds the HTTP surface around one controller owned by the caller.
    The app closes the controller when it shuts down.
    """
    broadcaster = broadcaster or StateBroadcaster(controller.intersection_id)
    controller.add_listener(broadcaster.publish_state)
    broadcaster.publish_state(controller.get_state())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        loop = asyncio.get_running_loop()
        broadcaster.bind_loop(loop)
        if isinstance(controller.scheduler, AsyncioScheduler):
            controller.scheduler.bind(loop)
        if start_auto_mode and not controller.closed:
            controller.start_auto_mode()
        try:
            yield
        finally:
            controller.close()
            controller.remove_listener(broadcaster.publish_state)

    app = FastAPI(title="Intersection Control API", lifespan=lifespan)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allow all origins for development
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(intersection.router, tags=["intersection"])
    app.include_router(streaming.router, tags=["streaming"])

    app.state.controller = controller
    app.state.broadcaster = broadcaster
    return app
