from __future__ import annotations

import logging
from io import StringIO

from address_normalizer.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    reset_logging()
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    reset_logging()
    first = setup_logging()
    assert setup_logging() is first
    assert len(first.handlers) == 1


def test_labeled_prefixes():
    captured = StringIO()
    logger = logging.getLogger("test_address_normalizer_labels")
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("d")
    logger.info("i")
    logger.warning("w")
    logger.error("e")
    logger.log(SUMMARY_LEVEL, "rows=1")

    assert captured.getvalue().splitlines() == ["DEBUG d", "INFO i", "WARN w", "ERROR e", "SUMMARY rows=1"]


def test_module_loggers_propagate_into_app_logger(capsys):
    reset_logging()
    setup_logging()
    logging.getLogger(f"{LOGGER_NAME}.services.orchestrator").info("read 3 rows")
    assert "INFO read 3 rows" in capsys.readouterr().out


def test_log_summary_and_debug(capsys):
    reset_logging()
    logger = setup_logging()
    logger.debug("hidden")
    set_debug(logger)
    logger.debug("shown")
    log_summary("rows=0")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "DEBUG shown" in out
    assert "SUMMARY rows=0" in out
    logger.setLevel(logging.INFO)
