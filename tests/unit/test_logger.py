"""Unit tests for logging helpers."""

import logging

from coronatracker.config import Config
from coronatracker.logger import PACKAGE_LOGGER, Logger, get_logger


def test_module_loggers_nest_under_package():
    assert get_logger("coronatracker.store").name == "coronatracker.store"
    assert get_logger("scripts.import").name == "coronatracker.scripts.import"
    assert get_logger(PACKAGE_LOGGER).name == PACKAGE_LOGGER


def test_package_logger_configured_once():
    get_logger("coronatracker.a")
    handlers = list(logging.getLogger(PACKAGE_LOGGER).handlers)

    get_logger("coronatracker.b")

    assert logging.getLogger(PACKAGE_LOGGER).handlers == handlers
    assert handlers


def test_setup_writes_log_file(tmp_path):
    Logger.reset()
    try:
        logger = Logger.setup(log_dir=tmp_path, console=False)
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        log_files = list(tmp_path.glob("coronatracker_*.log"))
        assert len(log_files) == 1
        assert "hello" in log_files[0].read_text(encoding="utf-8")
    finally:
        Logger.reset()
        Logger.setup()


def test_log_file_enabled_from_config(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "LOG_TO_FILE", True)
    monkeypatch.setattr(Config, "LOGS_DIR", tmp_path / "logs")
    Logger.reset()
    try:
        logger = Logger.setup(console=False)
        logger.warning("to file")
        for handler in logger.handlers:
            handler.flush()

        log_files = list((tmp_path / "logs").glob("coronatracker_*.log"))
        assert len(log_files) == 1
        assert "to file" in log_files[0].read_text(encoding="utf-8")
    finally:
        Logger.reset()
        monkeypatch.undo()
        Logger.setup()
