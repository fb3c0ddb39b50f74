"""
Logging Configuration
=====================
One console handler (and optionally a log file) on the `searchinspector`
logger. Inspector modules log through `logging.getLogger(__name__)`, so
polling, rebuild and editor failures all end up here.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route inspector log records to stdout and, if given, to `log_file`.

    Calling it again replaces the previous handlers, e.g. to switch the level
    from INFO to DEBUG while chasing a rebuild that fires every tick.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Path of a log file, overwritten on each run.
    """
    package_logger = logging.getLogger("searchinspector")
    package_logger.setLevel(level)
    package_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
