"""Utility functions and configuration."""

from snapshot_homing.utils.config import HomingConfig, POSITIONING_WEIGHT, TURNING_SIGN
from snapshot_homing.utils.logging import (
    create_session_logger,
    get_logger,
    LogCategory,
    LogLevel,
    SessionLogger,
    set_logger,
    StructuredLogger,
)

__all__ = [
    "HomingConfig",
    "POSITIONING_WEIGHT",
    "TURNING_SIGN",
    "create_session_logger",
    "get_logger",
    "LogCategory",
    "LogLevel",
    "SessionLogger",
    "set_logger",
    "StructuredLogger",
]
