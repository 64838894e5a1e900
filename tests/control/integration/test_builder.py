from pathlib import Path

import pytest
from omegaconf import OmegaConf
from trafficlight.common.config import ConfigManager
from trafficlight.common.exceptions import ConfigurationError
from trafficlight.control.application.builder import IntersectionBuilder
from trafficlight.control.application.controller import IntersectionController
from trafficlight.control.domain.entities import Phase
from trafficlight.control.infrastructure.display import LampBoardDisplay, LoggingDisplay
from trafficlight.control.infrastructure.schedulers import (
    AsyncioScheduler, ThreadingScheduler, VirtualClockScheduler
)

CONF_DIR = Path(__file__).resolve().parents[3] / "conf"

@pytest.fixture
def virtual_cfg():
    return ConfigManager(CONF_DIR).load_control_config(overrides=["scheduler=virtual"])

def test_build_controller_from_default_profile(virtual_cfg):
    builder = IntersectionBuilder(virtual_cfg)
    controller = builder.build_scheduler().build_display().build_controller()

    components = builder.get_components()
    assert isinstance(controller, IntersectionController)
    assert isinstance(components['scheduler'], VirtualClockScheduler)
    assert isinstance(components['display'], LampBoardDisplay)
    assert controller.timings.green_seconds == 10.0
    assert controller.intersection_id == "INT-001"

def test_built_controller_runs_the_cycle(virtual_cfg):
    builder = IntersectionBuilder(virtual_cfg)
    controller = builder.build_controller()
    scheduler = builder.scheduler

    controller.start_auto_mode()
    scheduler.advance(10)
    assert controller.get_phase() is Phase.YELLOW
    assert builder.display.render_board() == "N[Y] S[Y] E[R] W[R]"
    controller.close()

@pytest.mark.parametrize("scheduler, expected", [
    ("threading", ThreadingScheduler),
    ("asyncio", AsyncioScheduler),
    ("virtual", VirtualClockScheduler),
])
def test_scheduler_selection(scheduler, expected):
    cfg = ConfigManager.validate_control_config(OmegaConf.create({"scheduler": scheduler}))
    assert isinstance(IntersectionBuilder(cfg).build_scheduler().scheduler, expected)

def test_logging_display_selection():
    cfg = ConfigManager.validate_control_config(OmegaConf.create({"display": "logging"}))
    assert isinstance(IntersectionBuilder(cfg).build_display().display, LoggingDisplay)

def test_unknown_components_are_rejected():
    cfg = OmegaConf.create({"scheduler": "cron", "display": "hologram"})
    builder = IntersectionBuilder(cfg)
    with pytest.raises(ConfigurationError):
        builder.build_scheduler()
    with pytest.raises(ConfigurationError):
        builder.build_display()
