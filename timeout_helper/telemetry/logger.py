"""Package logging for timeout_helper.

Records go to the ``timeout_helper`` logger hierarchy, which carries only a
:class:`logging.NullHandler` and propagates to whatever handlers the host
application installs. ``configs/logging.yaml`` may raise or lower the level
or attach handlers; it is applied once, on the first :func:`get_logger` call.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from threading import RLock
from typing import Any, Mapping

import yaml

PACKAGE_LOGGER = "timeout_helper"

_CONFIG_LOCK = RLock()
_CONFIGURED = False

_ALLOWED_SECTIONS = ("formatters", "filters", "handlers", "loggers")


def _base_config() -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {"discard": {"class": "logging.NullHandler"}},
        "loggers": {
            PACKAGE_LOGGER: {"level": "WARNING", "handlers": ["discard"], "propagate": True},
        },
    }


def _config_path() -> Path:
    return Path(__file__).resolve().parents[2] / "configs" / "logging.yaml"


def _load_config(path: Path | None = None) -> dict[str, Any]:
    """Overlay the YAML file's sections on the package defaults.

    The root logger is never touched and the file cannot switch on
    ``disable_existing_loggers``; both belong to the host application.
    """

    config = _base_config()
    config_path = path if path is not None else _config_path()
    if not config_path.exists():
        return config
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:  # pragma: no cover - broken developer config
        logging.getLogger(PACKAGE_LOGGER).warning("ignoring %s: %s", config_path.name, exc)
        return config
    if not isinstance(data, Mapping):
        return config
    for section in _ALLOWED_SECTIONS:
        extra = data.get(section)
        if isinstance(extra, Mapping):
            config.setdefault(section, {}).update(extra)
    return config


def configure(path: Path | None = None) -> None:
    """Apply the logging config once; an explicit ``path`` always re-applies."""

    global _CONFIGURED
    with _CONFIG_LOCK:
        if _CONFIGURED and path is None:
            return
        logging.config.dictConfig(_load_config(path))
        _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return ``name`` as a child of the ``timeout_helper`` logger.

    ``"timing.waiting"`` and ``"timeout_helper.timing.waiting"`` name the
    same logger.
    """

    if not isinstance(name, str) or not name:
        raise ValueError("logger name must be a non-empty string")
    configure()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = ["PACKAGE_LOGGER", "configure", "get_logger"]
