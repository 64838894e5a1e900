import pytest
from trafficlight.control.application.controller import IntersectionController
from trafficlight.control.domain.entities import Direction, Phase
from trafficlight.control.infrastructure.display import LampBoardDisplay
from trafficlight.control.infrastructure.schedulers import VirtualClockScheduler


class RecordingDisplay:
    """Keeps every head update and flags any moment with both pairs non-red."""

    def __init__(self):
        self.updates = []
        self.current = {}
        self.conflicts = 0

    def show(self, head_id, phase):
        self.updates.append((head_id, phase))
        self.current[head_id] = phase
        non_red = [
            d for d in Direction
            if any(self.current.get(h, Phase.RED) is not Phase.RED for h in d.heads)
        ]
        if len(non_red) > 1:
            self.conflicts += 1


class LeakyScheduler:
    """Scheduler whose cancel() has no effect, to replay callbacks that already fired."""

    class Handle:
        def __init__(self, delay, callback):
            self.delay = delay
            self.callback = callback
            self.cancelled = False

        def cancel(self):
            self.cancelled = True

    def __init__(self):
        self.handles = []

    def schedule(self, delay_seconds, callback):
        handle = self.Handle(delay_seconds, callback)
        self.handles.append(handle)
        return handle


@pytest.fixture
def scheduler():
    return VirtualClockScheduler()

@pytest.fixture
def board():
    return LampBoardDisplay()

@pytest.fixture
def recording_display():
    return RecordingDisplay()

@pytest.fixture
def leaky_scheduler():
    return LeakyScheduler()

@pytest.fixture
def controller(scheduler, board):
    controller = IntersectionController(scheduler, display=board)
    yield controller
    controller.close()

@pytest.fixture
def frames(controller):
    recorded = []
    controller.add_listener(recorded.append)
    return recorded
