from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pathlib import Path
from typing import List, Optional

from .models import ControlConfig, ServerConfig
from ..exceptions import ConfigurationError

SCHEDULERS = ("threading", "asyncio", "virtual")
DISPLAYS = ("board", "logging")


class ConfigManager:
    """Centralizes loading and validation of the control configuration."""

    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = Path(config_dir)

    def load_control_config(
        self,
        profile: str = "default",
        overrides: Optional[List[str]] = None
    ) -> DictConfig:
        """Loads conf/control/<profile>.yaml, applies dotlist overrides and validates the result."""
        config_path = self.config_dir / "control" / f"{profile}.yaml"

        if not config_path.exists():
            raise ConfigurationError(f"Config not found: {config_path}")

        cfg = OmegaConf.load(config_path)
        if overrides:
            cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))
        return self.validate_control_config(cfg)

    @staticmethod
    def validate_control_config(cfg) -> DictConfig:
        """
        Merges a raw config over the ControlConfig schema.
        Type errors, unknown keys and out-of-range values become ConfigurationError.
        """
        try:
            merged = OmegaConf.merge(OmegaConf.structured(ControlConfig), cfg)
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid control config: {e}") from e

        if merged.timings.yellow_seconds <= 0 or merged.timings.green_seconds <= 0:
            raise ConfigurationError("Signal durations must be positive")
        if merged.scheduler not in SCHEDULERS:
            raise ConfigurationError(f"Unknown scheduler: {merged.scheduler}")
        if merged.display not in DISPLAYS:
            raise ConfigurationError(f"Unknown display: {merged.display}")

        return merged

    @staticmethod
    def validate_server_config(cfg=None) -> DictConfig:
        """Merges the optional server section over ServerConfig defaults."""
        try:
            merged = OmegaConf.merge(OmegaConf.structured(ServerConfig), cfg or {})
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid server config: {e}") from e

        if not 0 < merged.port < 65536:
            raise ConfigurationError(f"Invalid server port: {merged.port}")

        return merged
