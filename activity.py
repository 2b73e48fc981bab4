from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from config import CFG


def _log_path() -> Path:
    log_dir = Path(CFG.LOG_DIR)
    if not log_dir.is_absolute():
        log_dir = Path(__file__).resolve().parent / log_dir
    name = (CFG.ACTIVITY_LOG or "").strip() or "activity.log"
    if os.path.isabs(name):
        return Path(name)
    return log_dir / name


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("layout.activity")
    if logger.handlers:
        return logger

    log_path = _log_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    except Exception:
        # A read-only checkout still gets a working session, just no log file.
        logger.handlers.clear()
    return logger


ACTIVITY_LOGGER = _init_logger()


def _log_enabled() -> bool:
    return bool(ACTIVITY_LOGGER.handlers)


def emit(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Write ``event | key=value ...``; empty fields are dropped."""
    if not _log_enabled():
        return
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    try:
        if extras:
            ACTIVITY_LOGGER.log(level, "%s | %s", event, " ".join(extras))
        else:
            ACTIVITY_LOGGER.log(level, "%s", event)
    except Exception:
        # Logging failures must never bubble back to callers.
        pass


__all__ = ["ACTIVITY_LOGGER", "emit"]
