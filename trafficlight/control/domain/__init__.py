from .entities import (
    Phase, Direction, HeadId, SignalTimings, IntersectionState,
    YELLOW_SECONDS, GREEN_SECONDS, CONTINUATION_SECONDS
)
from .protocols import Scheduler, TimerHandle, PhaseDisplay, StateListener
from .signal_head import SignalHead
