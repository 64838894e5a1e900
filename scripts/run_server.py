import hydra
import uvicorn
from omegaconf import DictConfig

from trafficlight.common.config import ConfigManager
from trafficlight.common.exceptions import ConfigurationError
from trafficlight.common.logging import setup_logger
from trafficlight.control.application.builder import IntersectionBuilder
from trafficlight.control.presentation.api import create_app


@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    try:
        control_cfg = ConfigManager.validate_control_config(cfg.control)
        server_cfg = ConfigManager.validate_server_config(cfg.get("server"))
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        raise SystemExit(2)

    logger = setup_logger("trafficlight", control_cfg.log_level)
    logger.info("Configuration loaded.")

    controller = IntersectionBuilder(control_cfg).build_controller()
    app = create_app(controller, start_auto_mode=control_cfg.start_auto_mode)

    logger.info(f"Starting server at http://{server_cfg.host}:{server_cfg.port}")
    uvicorn.run(app, host=server_cfg.host, port=server_cfg.port)


if __name__ == "__main__":
    main()
