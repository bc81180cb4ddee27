"""Logging service module for the defense drill client.

This module provides the loguru configuration schema and context binding
utilities used by the attack coordinator and the CLI.

Rules Applied:
    - #15 Logging Standards: Loguru, dual sinks
"""

from defense_drill.logging.config import LoggingConfig, get_logging_config
from defense_drill.logging.context import (
    clear_context,
    generate_cycle_id,
    get_current_context,
    get_drill_logger,
)

__all__ = [
    "LoggingConfig",
    "clear_context",
    "generate_cycle_id",
    "get_current_context",
    "get_drill_logger",
    "get_logging_config",
]
