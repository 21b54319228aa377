from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from overlay_tooltip.logging_utils import (
    LOG_DIR_ENV_VAR,
    PROPAGATE_ENV_VAR,
    TOOLTIP_LOGGER_NAME,
    build_rotating_file_handler,
    configure_tooltip_logger,
    resolve_log_level,
    resolve_logs_dir,
)


@pytest.fixture
def tooltip_logger():
    logger = logging.getLogger(TOOLTIP_LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in logger.handlers:
        if handler not in saved[0]:
            handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_resolve_log_level():
    assert resolve_log_level(True) == logging.DEBUG
    assert resolve_log_level(False) == logging.INFO


def test_resolve_logs_dir_prefers_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv(LOG_DIR_ENV_VAR, str(tmp_path / "custom"))

    target = resolve_logs_dir("Tooltip")

    assert target == tmp_path / "custom" / "Tooltip"
    assert target.is_dir()


def test_rotating_handler_keeps_retention_minus_one_backups(tmp_path):
    handler = build_rotating_file_handler(tmp_path / "logs", "tooltip.log", retention=3)
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.backupCount == 2
        assert handler.baseFilename.endswith("tooltip.log")
    finally:
        handler.close()


def test_configure_is_idempotent_per_file(tmp_path, monkeypatch, tooltip_logger):
    monkeypatch.delenv(PROPAGATE_ENV_VAR, raising=False)

    configure_tooltip_logger(debug_enabled=True, log_dir=tmp_path)
    configure_tooltip_logger(debug_enabled=True, log_dir=tmp_path)

    file_handlers = [h for h in tooltip_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert tooltip_logger.level == logging.DEBUG
    assert tooltip_logger.propagate is False


def test_propagation_env_var_enables_propagation(tmp_path, monkeypatch, tooltip_logger):
    monkeypatch.setenv(PROPAGATE_ENV_VAR, "yes")

    configure_tooltip_logger(log_dir=tmp_path)

    assert tooltip_logger.propagate is True
    assert tooltip_logger.level == logging.INFO


def test_logger_setup_is_exported_from_package():
    import overlay_tooltip

    assert overlay_tooltip.configure_tooltip_logger is configure_tooltip_logger
    assert "configure_tooltip_logger" in overlay_tooltip.__all__
