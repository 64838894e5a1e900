"""
Command endpoints of the intersection controller.
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from .....common.exceptions import ControllerClosedError
from .....common.schemas.intersection import CommandResponse, IntersectionStateSchema
from ....application.controller import IntersectionController

router = APIRouter(prefix="/intersection")


def get_controller(request: Request) -> IntersectionController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(503, "Controller not initialized")
    return controller


def _run(controller: IntersectionController, command: str, action) -> CommandResponse:
    try:
        action()
    except ControllerClosedError as e:
        raise HTTPException(409, str(e))
    state = IntersectionStateSchema.from_state(controller.intersection_id, controller.get_state())
    return CommandResponse(command=command, state=state)


@router.get("/state", response_model=IntersectionStateSchema)
async def get_state(controller: IntersectionController = Depends(get_controller)):
    """Current phase, active direction and per-head phases."""
    return IntersectionStateSchema.from_state(controller.intersection_id, controller.get_state())


@router.post("/green", response_model=CommandResponse)
async def change_to_green(controller: IntersectionController = Depends(get_controller)):
    return _run(controller, "green", controller.change_to_green)


@router.post("/yellow", response_model=CommandResponse)
async def change_to_yellow(controller: IntersectionController = Depends(get_controller)):
    return _run(controller, "yellow", controller.change_to_yellow)


@router.post("/red", response_model=CommandResponse)
async def change_to_red(controller: IntersectionController = Depends(get_controller)):
    return _run(controller, "red", controller.change_to_red)


@router.post("/next", response_model=CommandResponse)
async def next_state(controller: IntersectionController = Depends(get_controller)):
    return _run(controller, "next", controller.next_state)


@router.post("/auto/start", response_model=CommandResponse)
async def start_auto_mode(controller: IntersectionController = Depends(get_controller)):
    """Starts (or restarts) the automatic cycle."""
    return _run(controller, "auto/start", controller.start_auto_mode)


@router.post("/auto/stop", response_model=CommandResponse)
async def stop_auto_mode(controller: IntersectionController = Depends(get_controller)):
    return _run(controller, "auto/stop", controller.stop_auto_mode)
