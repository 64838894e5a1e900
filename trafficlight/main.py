import argparse
import sys
from pathlib import Path
from typing import List, Optional


def run_console(profile: str, overrides: List[str], config_dir: Path) -> int:
    from trafficlight.common.config import ConfigManager
    from trafficlight.common.logging import setup_logger
    from trafficlight.control.application.builder import IntersectionBuilder
    from trafficlight.control.infrastructure.display import LampBoardDisplay
    from trafficlight.control.infrastructure.schedulers import ThreadingScheduler
    from trafficlight.control.presentation.console import ConsoleCommandShell

    # The console blocks on stdin, so timers must fire on their own threads
    cfg = ConfigManager(config_dir).load_control_config(profile, overrides + ["scheduler=threading"])
    logger = setup_logger("trafficlight", cfg.log_level)

    builder = IntersectionBuilder(cfg)
    controller = builder.build_scheduler().build_display().build_controller()
    board = builder.display if isinstance(builder.display, LampBoardDisplay) else None

    with controller:
        if cfg.start_auto_mode:
            controller.start_auto_mode()
        try:
            ConsoleCommandShell(controller, board).run()
        except KeyboardInterrupt:
            logger.info("Stopping console...")
        finally:
            if isinstance(builder.scheduler, ThreadingScheduler):
                builder.scheduler.shutdown()
    return 0


def run_simulation(profile: str, overrides: List[str], config_dir: Path, seconds: Optional[float]) -> int:
    from trafficlight.common.config import ConfigManager
    from trafficlight.control.application.simulation import format_timeline, simulate_auto_cycle
    from trafficlight.control.domain.entities import SignalTimings

    cfg = ConfigManager(config_dir).load_control_config(profile, overrides)
    timings = SignalTimings(
        yellow_seconds=float(cfg.timings.yellow_seconds),
        green_seconds=float(cfg.timings.green_seconds)
    )
    entries = simulate_auto_cycle(timings, seconds)
    print(format_timeline(entries))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point: interactive console or virtual-clock simulation of the auto cycle.
    Extra arguments are OmegaConf dotlist overrides, e.g. timings.green_seconds=5
    """
    parser = argparse.ArgumentParser(description="Intersection signal controller")
    parser.add_argument('mode', choices=['console', 'simulate'], help="What to run")
    parser.add_argument('--profile', default='default', help="Profile under conf/control/")
    parser.add_argument('--config-dir', default='conf', type=Path, help="Configuration directory")
    parser.add_argument('--seconds', type=float, default=None, help="Simulated duration (default: one cycle)")

    args, overrides = parser.parse_known_args(argv)

    from trafficlight.common.exceptions import ConfigurationError
    try:
        if args.mode == 'console':
            return run_console(args.profile, overrides, args.config_dir)
        return run_simulation(args.profile, overrides, args.config_dir, args.seconds)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
