from .intersection import IntersectionStateSchema, CommandResponse

__all__ = [
    "IntersectionStateSchema",
    "CommandResponse",
]
