from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

TOOLTIP_LOGGER_NAME = "OverlayTooltip"
PROPAGATE_ENV_VAR = "OVERLAY_TOOLTIP_PROPAGATE_LOGS"
LOG_DIR_ENV_VAR = "OVERLAY_TOOLTIP_LOG_DIR"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def resolve_logs_dir(log_dir_name: str = "OverlayTooltip") -> Path:
    """
    Resolve the directory to store tooltip logs.

    Strategy:
    - Use OVERLAY_TOOLTIP_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / "logs")
    candidates.append(cache_home / "logs")
    candidates.append(Path.cwd() / "logs")

    for base in candidates:
        try:
            target = base / log_dir_name
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def _propagation_enabled() -> bool:
    value = os.getenv(PROPAGATE_ENV_VAR)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def configure_tooltip_logger(
    *,
    debug_enabled: bool = False,
    log_dir: Optional[Path] = None,
    filename: str = "overlay-tooltip.log",
    retention: int = 5,
) -> logging.Logger:
    """Attach a rotating file handler to the tooltip logger (idempotent)."""
    logger = logging.getLogger(TOOLTIP_LOGGER_NAME)
    logger.setLevel(resolve_log_level(debug_enabled))
    logger.propagate = _propagation_enabled()
    target_dir = log_dir if log_dir is not None else resolve_logs_dir()
    target_path = (target_dir / filename).resolve()
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename).resolve() == target_path:
            return logger
    logger.addHandler(
        build_rotating_file_handler(
            target_dir,
            filename,
            retention=retention,
            formatter=logging.Formatter(DEFAULT_LOG_FORMAT),
        )
    )
    return logger
