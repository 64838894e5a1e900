"""
Domain entities for the Control module.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from ...common.exceptions import ConfigurationError

YELLOW_SECONDS = 3.0
GREEN_SECONDS = 10.0
CONTINUATION_SECONDS = YELLOW_SECONDS + GREEN_SECONDS


class Phase(Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"


class HeadId(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class Direction(Enum):
    NORTH_SOUTH = "north-south"
    EAST_WEST = "east-west"

    @property
    def opposite(self) -> "Direction":
        if self is Direction.NORTH_SOUTH:
            return Direction.EAST_WEST
        return Direction.NORTH_SOUTH

    @property
    def heads(self) -> Tuple[HeadId, HeadId]:
        if self is Direction.NORTH_SOUTH:
            return (HeadId.NORTH, HeadId.SOUTH)
        return (HeadId.EAST, HeadId.WEST)

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class SignalTimings:
    """
    Durations driving the automatic cycle and the yellow expiry.
    """
    yellow_seconds: float = YELLOW_SECONDS
    green_seconds: float = GREEN_SECONDS

    def __post_init__(self):
        if self.yellow_seconds <= 0 or self.green_seconds <= 0:
            raise ConfigurationError(
                f"Signal durations must be positive (yellow={self.yellow_seconds}, green={self.green_seconds})"
            )

    @property
    def continuation_seconds(self) -> float:
        # Time between two green expiries: yellow of one direction + green of the next
        return self.yellow_seconds + self.green_seconds

    @property
    def cycle_period_seconds(self) -> float:
        return 2 * self.continuation_seconds


@dataclass(frozen=True)
class IntersectionState:
    """
    Snapshot of the controller taken after a render pass.
    """
    phase: Phase
    active_direction: Direction
    heads: Dict[HeadId, Phase] = field(default_factory=dict)
    auto_mode: bool = False
    yellow_pending: bool = False

    def non_red_directions(self) -> List[Direction]:
        return [
            direction for direction in Direction
            if any(self.heads.get(head, Phase.RED) is not Phase.RED for head in direction.heads)
        ]

    def describe(self) -> str:
        heads = " ".join(
            f"{head.value[0].upper()}={self.heads[head].name}" for head in HeadId if head in self.heads
        )
        return f"{self.active_direction.label} {self.phase.name} | {heads}"
