from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import json
import logging
import math
import os
from pathlib import Path
from typing import Final, TypeAlias

CONFIG_DIR_NAME: Final[str] = "refreshing_cache"
CONFIG_FILE_NAME: Final[str] = "config.json"
CONFIG_PATH_ENV: Final[str] = "REFRESHING_CACHE_CONFIG"
TTL_ENV: Final[str] = "REFRESHING_CACHE_TTL_SECONDS"
MAX_SIZE_ENV: Final[str] = "REFRESHING_CACHE_MAX_SIZE"

JsonValue: TypeAlias = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)

logger = logging.getLogger(__name__)


class CacheLimit(Enum):
    MAX_SIZE = 100
    TTL_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class ConfigError(ValueError):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class CacheConfig:
    ttl_seconds: float
    max_size: int = CacheLimit.MAX_SIZE.value

    def __post_init__(self) -> None:
        ttl = self.ttl_seconds
        if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
            raise ConfigError(f"ttl_seconds must be a number, got {ttl!r}")
        if math.isnan(ttl) or ttl < 0:
            raise ConfigError(f"ttl_seconds must be non-negative, got {ttl!r}")
        size = self.max_size
        if isinstance(size, bool) or not isinstance(size, int):
            raise ConfigError(f"max_size must be an integer, got {size!r}")
        if size <= 0:
            raise ConfigError(f"max_size must be positive, got {size!r}")


def config_path() -> Path:
    explicit = os.environ.get(CONFIG_PATH_ENV)
    if explicit:
        return Path(explicit)
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(path: Path | None = None) -> CacheConfig:
    resolved = path if path is not None else config_path()
    ttl_seconds, max_size = _read_file(resolved)
    ttl_seconds = _env_float(TTL_ENV, ttl_seconds)
    max_size = _env_int(MAX_SIZE_ENV, max_size)
    return CacheConfig(ttl_seconds=ttl_seconds, max_size=max_size)


def _read_file(path: Path) -> tuple[float, int]:
    defaults = (CacheLimit.TTL_SECONDS.value, CacheLimit.MAX_SIZE.value)
    if not path.exists():
        return defaults
    try:
        payload: JsonValue = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return defaults
    if not isinstance(payload, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return defaults
    return (
        _get_number(payload.get("ttl_seconds"), defaults[0]),
        _get_int(payload.get("max_size"), defaults[1]),
    )


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _get_number(value: JsonValue | None, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default


def _get_int(value: JsonValue | None, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    return default
