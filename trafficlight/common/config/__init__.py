from .models import TimingConfig, ControlConfig, ServerConfig
from .manager import ConfigManager

__all__ = [
    "TimingConfig",
    "ControlConfig",
    "ServerConfig",
    "ConfigManager",
]
