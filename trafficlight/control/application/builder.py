from omegaconf import DictConfig
from typing import Any, Dict, Optional

from .controller import IntersectionController
from ..domain.entities import SignalTimings
from ..domain.protocols import PhaseDisplay, Scheduler
from ..infrastructure.display import LampBoardDisplay, LoggingDisplay
from ..infrastructure.schedulers import AsyncioScheduler, ThreadingScheduler, VirtualClockScheduler
from ...common.exceptions import ConfigurationError


class IntersectionBuilder:
    """
    Builder pattern for constructing the intersection controller.
    Centralizes component instantiation and wiring from a validated ControlConfig.
    """

    def __init__(self, config: DictConfig):
        self.config = config

        # Components
        self.scheduler: Optional[Scheduler] = None
        self.display: Optional[PhaseDisplay] = None
        self.controller: Optional[IntersectionController] = None

    def build_scheduler(self) -> 'IntersectionBuilder':
        kind = self.config.scheduler
        if kind == "threading":
            self.scheduler = ThreadingScheduler()
        elif kind == "asyncio":
            self.scheduler = AsyncioScheduler()
        elif kind == "virtual":
            self.scheduler = VirtualClockScheduler()
        else:
            raise ConfigurationError(f"Unknown scheduler: {kind}")
        return self

    def build_display(self) -> 'IntersectionBuilder':
        kind = self.config.display
        if kind == "board":
            self.display = LampBoardDisplay()
        elif kind == "logging":
            self.display = LoggingDisplay()
        else:
            raise ConfigurationError(f"Unknown display: {kind}")
        return self

    def build_controller(self) -> IntersectionController:
        if self.scheduler is None:
            self.build_scheduler()
        if self.display is None:
            self.build_display()

        timings = SignalTimings(
            yellow_seconds=float(self.config.timings.yellow_seconds),
            green_seconds=float(self.config.timings.green_seconds)
        )
        self.controller = IntersectionController(
            scheduler=self.scheduler,
            display=self.display,
            timings=timings,
            intersection_id=self.config.intersection_id
        )
        return self.controller

    def get_components(self) -> Dict[str, Any]:
        return {
            'scheduler': self.scheduler,
            'display': self.display,
            'controller': self.controller,
        }
