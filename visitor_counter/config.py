"""Process-wide settings, read from the environment once per cold start."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_TABLE_NAME = "visitor-counter"
DEFAULT_NAME = "default"
DEFAULT_ALLOWED_NAMES = DEFAULT_NAME
DEFAULT_MIN_WIDTH = 5
DEFAULT_WINDOW_SECONDS = 3600
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_allowed_names(raw: str | None) -> frozenset[str]:
    """Split a comma-delimited allow-list, dropping blanks."""
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def _int_setting(environ, key: str, default: int, minimum: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {value}")
    return value


def _bool_setting(environ, key: str, default: bool) -> bool:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _log_level(environ) -> str:
    level = environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


@dataclass(frozen=True)
class Settings:
    table_name: str = DEFAULT_TABLE_NAME
    allowed_names: frozenset[str] = frozenset({DEFAULT_NAME})
    min_width: int = DEFAULT_MIN_WIDTH
    default_name: str = DEFAULT_NAME
    dedup_window_seconds: int = DEFAULT_WINDOW_SECONDS
    group_digits: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if self.default_name not in self.allowed_names:
            raise ConfigError(
                f"DEFAULT_NAME {self.default_name!r} is not in ALLOWED_NAMES ({','.join(sorted(self.allowed_names))})"
            )

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        return cls(
            table_name=environ.get("TABLE_NAME", DEFAULT_TABLE_NAME),
            allowed_names=parse_allowed_names(environ.get("ALLOWED_NAMES", DEFAULT_ALLOWED_NAMES)),
            min_width=_int_setting(environ, "MIN_WIDTH", DEFAULT_MIN_WIDTH, 0),
            default_name=environ.get("DEFAULT_NAME", DEFAULT_NAME).strip() or DEFAULT_NAME,
            dedup_window_seconds=_int_setting(environ, "DEDUP_WINDOW_SECONDS", DEFAULT_WINDOW_SECONDS, 1),
            group_digits=_bool_setting(environ, "GROUP_DIGITS", False),
            log_level=_log_level(environ),
        )

    def is_allowed(self, name: str) -> bool:
        return name in self.allowed_names
