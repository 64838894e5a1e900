from typing import Optional

from .entities import HeadId, Phase
from .protocols import PhaseDisplay
from ...common.exceptions import InvalidPhaseError


class SignalHead:
    """
    One physical signal head of the intersection.
    Holds the phase it currently shows and forwards every update to the display.
    """

    def __init__(self, identity: HeadId, display: Optional[PhaseDisplay] = None):
        self.identity = identity
        self.display = display
        self._displayed_phase = Phase.RED

    def set_phase(self, phase: Phase):
        if not isinstance(phase, Phase):
            raise InvalidPhaseError(f"Invalid phase for {self.identity.value} head: {phase!r}")
        self._displayed_phase = phase
        if self.display is not None:
            self.display.show(self.identity, phase)

    def get_phase(self) -> Phase:
        return self._displayed_phase

    def __repr__(self):
        return f"SignalHead({self.identity.value}, {self._displayed_phase.name})"
