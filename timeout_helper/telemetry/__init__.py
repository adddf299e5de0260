"""Convenience exports for timeout_helper telemetry utilities."""

from . import logger

__all__ = ["logger"]
