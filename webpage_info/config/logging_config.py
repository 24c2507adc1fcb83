import logging
import os
from datetime import datetime
from typing import Optional

from webpage_info.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Set up console logging, plus a file under logs/ when a file name is configured.

    Args:
        level: Log level name, defaults to settings.log_level
        log_file: File name prefix, defaults to settings.log_file; empty disables file logging
    """
    level = (level or settings.log_level).upper()
    if log_file is None:
        log_file = settings.log_file

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        logs_dir = "logs"
        if not os.path.exists(logs_dir):
            os.makedirs(logs_dir)

        # One file per process start, e.g. logs/webpage-info_2024-01-01_12-00-00.log
        current_time = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_filename = os.path.join(logs_dir, f"{log_file}_{current_time}.log")

        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        # Also send uvicorn access logs to the same file
        access_logger = logging.getLogger("uvicorn.access")
        access_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name
    """
    return logging.getLogger(name)
