from __future__ import annotations

import logging
from pathlib import Path

from config_composer.core.utils.logging import PACKAGE_LOGGER, configure_logging, reset_logging


def _own_handlers() -> list:
    return [h for h in logging.getLogger(PACKAGE_LOGGER).handlers if isinstance(h, logging.StreamHandler)]


def test_configure_logging_writes_to_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "composer.log"
    configure_logging(level="INFO", log_path=log_path)

    logging.getLogger("config_composer.tests").info("hello %s", "world")
    reset_logging()

    text = log_path.read_text(encoding="utf-8")
    assert "INFO config_composer.tests: hello world" in text


def test_configure_logging_replaces_previous_handler(tmp_path: Path) -> None:
    configure_logging(level="DEBUG", log_path=tmp_path / "a.log")
    configure_logging(level="WARNING")

    handlers = _own_handlers()
    assert len(handlers) == 1
    assert not isinstance(handlers[0], logging.FileHandler)
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING


def test_reset_logging_removes_handler() -> None:
    configure_logging(level="DEBUG")
    reset_logging()
    assert _own_handlers() == []
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.NOTSET
