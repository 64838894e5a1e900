"""
Runs the automatic cycle on a virtual clock and records every rendered frame.
"""
from dataclasses import dataclass
from typing import List, Optional

from .controller import IntersectionController
from ..domain.entities import IntersectionState, SignalTimings
from ..domain.protocols import PhaseDisplay
from ..infrastructure.schedulers import VirtualClockScheduler


@dataclass
class TimelineEntry:
    at_seconds: float
    state: IntersectionState


def simulate_auto_cycle(
    timings: Optional[SignalTimings] = None,
    duration_seconds: Optional[float] = None,
    display: Optional[PhaseDisplay] = None
) -> List[TimelineEntry]:
    """
    Starts auto mode at t=0 and advances the virtual clock by duration_seconds
    (one full cycle period by default). Returns the frames in firing order.
    """
    timings = timings or SignalTimings()
    if duration_seconds is None:
        duration_seconds = timings.cycle_period_seconds

    scheduler = VirtualClockScheduler()
    entries: List[TimelineEntry] = []

    with IntersectionController(scheduler, display=display, timings=timings) as controller:
        controller.add_listener(lambda state: entries.append(TimelineEntry(scheduler.now, state)))
        controller.start_auto_mode()
        scheduler.advance(duration_seconds)

    return entries


def format_timeline(entries: List[TimelineEntry]) -> str:
    return "\n".join(f"[{entry.at_seconds:7.1f}s] {entry.state.describe()}" for entry in entries)
