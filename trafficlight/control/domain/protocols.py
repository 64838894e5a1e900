"""
Domain protocols for the Control module.
"""
from typing import Callable, Protocol

from .entities import HeadId, IntersectionState, Phase


class TimerHandle(Protocol):
    """
    A callback armed on a scheduler. Cancelling is idempotent.
    """
    def cancel(self) -> None:
        ...

    @property
    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """
    Timer service used by the controller: run a callback after a delay.
    """
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class PhaseDisplay(Protocol):
    """
    Maps a head's phase to a visible indicator.
    """
    def show(self, head_id: HeadId, phase: Phase) -> None:
        ...


StateListener = Callable[[IntersectionState], None]
