"""
Startup glue for containerps.

run() wires the pieces together once:
  1. Load configuration (~/.config/containerps/config.yaml)
  2. Configure logging to a rotating file (never to the terminal, which
     belongs to the Textual UI)
  3. Check the container engine through the docker SDK and log the result
  4. Create the Textual sink and the AppContext it shares with the
     inventory builder and the action dispatcher
  5. Run the UI; the first refresh starts when the UI is mounted
"""

import logging
from logging.handlers import RotatingFileHandler

from . import get_log_path
from .backend import DockerBackend
from .config import AppConfig, ConfigManager
from .state import AppContext
from .textual_app import ContainerPSApp

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(config: AppConfig) -> str:
    log_config = config.logging
    log_path = log_config.file_path or get_log_path()
    handler = RotatingFileHandler(
        log_path,
        maxBytes=log_config.max_size_mb * 1024 * 1024,
        backupCount=log_config.backup_count,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_config.level.upper(), logging.INFO))
    return log_path


def run() -> None:
    config = ConfigManager().get_config()
    log_path = setup_logging(config)
    logging.info(f"containerps started, logging to {log_path}")

    if config.engine.check_engine and DockerBackend().engine_version() is None:
        logging.warning("Container engine is not reachable; the inventory will show the error")

    app = ContainerPSApp(config)
    app.attach(AppContext.create(config, sink=app, dialog=app))
    app.run()
    logging.info("containerps stopped")
