from typing import Dict
from pydantic import BaseModel, Field, ConfigDict


class IntersectionStateSchema(BaseModel):
    """
    Public view of the intersection after a render pass.
    """
    intersection_id: str = Field(..., description="Identifier of the intersection")
    phase: str = Field(..., description="Phase of the active direction (red, yellow, green)")
    active_direction: str = Field(..., description="Direction allowed non-red phases (north-south, east-west)")
    heads: Dict[str, str] = Field(..., description="Displayed phase per head (north, south, east, west)")
    auto_mode: bool = Field(False, description="Whether the automatic cycle is running")
    yellow_pending: bool = Field(False, description="Whether a manual yellow is waiting to expire")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_state(cls, intersection_id: str, state) -> "IntersectionStateSchema":
        return cls(
            intersection_id=intersection_id,
            phase=state.phase.value,
            active_direction=state.active_direction.value,
            heads={head.value: phase.value for head, phase in state.heads.items()},
            auto_mode=state.auto_mode,
            yellow_pending=state.yellow_pending
        )


class CommandResponse(BaseModel):
    """
    Result of a command sent to the controller.
    """
    command: str = Field(..., description="Command that was executed")
    state: IntersectionStateSchema = Field(..., description="State after the command")

    model_config = ConfigDict(frozen=True)
