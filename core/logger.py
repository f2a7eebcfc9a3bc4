from __future__ import annotations
from loguru import logger
from .config import config
import sys

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <7}</level> | "
    "<cyan>{extra[component]}</cyan> | {message}"
)

_debugging = config.environment == "development" and config.log_level == "DEBUG"

# Records logged without bind() still need a component for the format
logger.remove()
logger.configure(extra={"component": "app"})
logger.add(
    sys.stdout,
    level=config.log_level,
    enqueue=True,
    backtrace=_debugging,
    diagnose=_debugging,
    colorize=sys.stdout.isatty(),
    format=CONSOLE_FORMAT,
)
# JSON lines; one file per process family, rotated by size
logger.add(
    config.log_file,
    rotation="10 MB",
    retention="30 days",
    compression="zip",
    level=config.log_level,
    enqueue=True,
    serialize=True,
)


def get_logger(name: str = "app"):
    """Logger bound to a component path such as ``wizard/state_machine``."""
    return logger.bind(component=name)
