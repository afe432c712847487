"""Configuration for ordertrack.

Every setting comes from an environment variable with a default, read
once into an immutable ``Settings`` object by ``load_settings()``.

    ORDERTRACK_UPLOADS_DIR     directory watched for order uploads   (uploads)
    ORDERTRACK_DATA_DIR        where the snapshot and canceled log go (.)
    ORDERTRACK_WATCH_MODE      auto | native | polling                (auto)
    ORDERTRACK_POLL_INTERVAL   seconds between polling ticks          (2.0)
    ORDERTRACK_SETTLE_DELAY    seconds to wait after a file event     (0.1)
    ORDERTRACK_LOG_LEVEL       DEBUG | INFO | WARNING | ERROR         (INFO)
    ORDERTRACK_LOG_FILE        optional rotating log file             (unset)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ordertrack.infrastructure.ingestion.watcher import WatchMode

ENV_PREFIX = "ORDERTRACK_"


class ConfigurationError(ValueError):
    """An environment variable holds a value the application cannot use."""


@dataclass(frozen=True)
class Settings:
    uploads_dir: Path = Path("uploads")
    data_dir: Path = Path(".")
    watch_mode: WatchMode = WatchMode.AUTO
    poll_interval: float = 2.0
    settle_delay: float = 0.1
    log_level: int = logging.INFO
    log_file: Path | None = None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    defaults = Settings()

    def get(name: str) -> str | None:
        value = env.get(ENV_PREFIX + name)
        return value.strip() if value is not None and value.strip() else None

    log_file = get("LOG_FILE")
    return Settings(
        uploads_dir=Path(get("UPLOADS_DIR") or defaults.uploads_dir),
        data_dir=Path(get("DATA_DIR") or defaults.data_dir),
        watch_mode=_watch_mode(get("WATCH_MODE"), defaults.watch_mode),
        poll_interval=_positive_float("POLL_INTERVAL", get("POLL_INTERVAL"), defaults.poll_interval),
        settle_delay=_non_negative_float("SETTLE_DELAY", get("SETTLE_DELAY"), defaults.settle_delay),
        log_level=parse_log_level(get("LOG_LEVEL"), defaults.log_level),
        log_file=Path(log_file) if log_file else None,
    )


def parse_log_level(value: str | None, default: int = logging.INFO) -> int:
    if value is None:
        return default
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {value!r}")
    return level


def _watch_mode(value: str | None, default: WatchMode) -> WatchMode:
    if value is None:
        return default
    try:
        return WatchMode(value.lower())
    except ValueError:
        choices = ", ".join(m.value for m in WatchMode)
        raise ConfigurationError(
            f"{ENV_PREFIX}WATCH_MODE must be one of {choices}, got {value!r}"
        ) from None


def _float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a number, got {value!r}") from None


def _positive_float(name: str, value: str | None, default: float) -> float:
    if value is None:
        return default
    number = _float(name, value)
    if not number > 0:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be positive, got {value!r}")
    return number


def _non_negative_float(name: str, value: str | None, default: float) -> float:
    if value is None:
        return default
    number = _float(name, value)
    if not number >= 0:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must not be negative, got {value!r}")
    return number
