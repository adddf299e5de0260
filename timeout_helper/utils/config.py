"""Utility helpers for loading YAML configuration files."""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

__all__ = ["TimeoutDefaults", "default_timeouts", "load_config", "load_timeout_defaults"]

_FALLBACK_TIMEOUT_SECONDS = 120.0
_FALLBACK_SHORT_TIMEOUT_SECONDS = 4.0
_MAX_SECONDS = timedelta.max.total_seconds()


@dataclass(frozen=True)
class TimeoutDefaults:
    """Default timeouts handed out by ``TimeoutHelper.default*``."""

    timeout: timedelta
    short_timeout: timedelta


def load_config(path: str | Path) -> Any:
    """Return the parsed YAML document located at ``path``.

    Performs basic existence checks, parses the document via
    :func:`yaml.safe_load`, and raises a :class:`ValueError` if the result is
    not a mapping. An empty document is treated as an empty mapping.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration file not found: {config_path}")
    raw_text = config_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse configuration: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("configuration root must be a mapping")
    return data


def load_timeout_defaults(path: str | Path | None = None) -> TimeoutDefaults:
    """Read the ``timeouts`` section of ``configs/timeouts.yaml``.

    Missing files, sections or keys, and values that are not non-negative
    numbers, fall back to two minutes and four seconds.
    """

    config_path = Path(path) if path is not None else _default_path()
    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            data = load_config(config_path)
        except ValueError:
            data = {}

    section = data.get("timeouts")
    if not isinstance(section, dict):
        section = {}
    return TimeoutDefaults(
        timeout=timedelta(
            seconds=_coerce_seconds(section.get("default_timeout_seconds"), _FALLBACK_TIMEOUT_SECONDS)
        ),
        short_timeout=timedelta(
            seconds=_coerce_seconds(
                section.get("default_short_timeout_seconds"), _FALLBACK_SHORT_TIMEOUT_SECONDS
            )
        ),
    )


@functools.lru_cache(maxsize=1)
def default_timeouts() -> TimeoutDefaults:
    """Repository defaults from ``configs/timeouts.yaml``, read once per process."""

    return load_timeout_defaults()


def _default_path() -> Path:
    return Path(__file__).resolve().parents[2] / "configs" / "timeouts.yaml"


def _coerce_seconds(value: Any, fallback: float) -> float:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(seconds) or seconds < 0 or seconds >= _MAX_SECONDS:
        return fallback
    return seconds
