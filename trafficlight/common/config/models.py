from dataclasses import dataclass, field


@dataclass
class TimingConfig:
    yellow_seconds: float = 3.0
    green_seconds: float = 10.0

@dataclass
class ControlConfig:
    intersection_id: str = "INT-001"
    timings: TimingConfig = field(default_factory=TimingConfig)
    start_auto_mode: bool = True
    scheduler: str = "threading"  # threading, asyncio, virtual
    display: str = "board"  # board, logging
    log_level: str = "INFO"

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
