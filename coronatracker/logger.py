"""
Logging Configuration for CoronaTracker

Handlers are attached once to the package logger ("coronatracker"); module
loggers are its children and propagate to it.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from coronatracker.config import Config

PACKAGE_LOGGER = "coronatracker"


class Logger:
    """Centralized logging configuration."""

    _configured = False

    @classmethod
    def setup(
        cls,
        log_dir: Optional[Path] = None,
        level: Optional[int] = None,
        console: bool = True,
    ) -> logging.Logger:
        """
        Configure the package logger.

        Args:
            log_dir: Directory for a dated log file; when None, Config.LOGS_DIR
                is used if Config.LOG_TO_FILE is set, otherwise no file output
            level: Logging level, defaults to CORONATRACKER_LOG_LEVEL or INFO
            console: Enable console output

        Returns:
            The package logger
        """
        logger = logging.getLogger(PACKAGE_LOGGER)
        if cls._configured:
            return logger

        if level is None:
            level = getattr(logging, os.getenv("CORONATRACKER_LOG_LEVEL", "INFO").upper(), logging.INFO)
        logger.setLevel(level)
        logger.propagate = False

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        if console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if log_dir is None and Config.LOG_TO_FILE:
            log_dir = Config.LOGS_DIR

        if log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d")
            log_file = log_dir / f"{PACKAGE_LOGGER}_{timestamp}.log"

            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        cls._configured = True
        return logger

    @classmethod
    def reset(cls):
        """Drop the package handlers so setup() can run again."""
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        cls._configured = False


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Convenience function to get a logger.

    Names outside the package are nested under it so they share its handlers.

    Args:
        name: Logger name (usually __name__)
        log_dir: Optional log directory, only honoured on first setup

    Returns:
        Logger instance
    """
    Logger.setup(log_dir=log_dir)
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
