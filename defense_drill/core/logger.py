"""Loguru logging configuration.

This module provides a centralized logging setup. All logging in the
application should use the configured loguru logger.

Features:
    - Dual sinks: Console (human-readable) + File (text with rotation or JSON)
    - Structured logging with context binding

Rules Applied:
    - #15 Logging Standards: Loguru, dual sinks
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from defense_drill.logging.config import LoggingConfig, get_logging_config

if TYPE_CHECKING:
    from loguru import Logger

# =============================================================================
# Console Format Templates
# =============================================================================

CONSOLE_FORMAT_DEFAULT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


# =============================================================================
# Setup Functions
# =============================================================================


def setup_logger_from_config(config: LoggingConfig | None = None) -> None:
    """Initialize logger from Pydantic config model.

    Args:
        config: LoggingConfig instance (loads from env if None)

    Example:
        >>> from defense_drill.core.logger import setup_logger_from_config
        >>> setup_logger_from_config()  # Loads from LOG_* env vars
    """
    if config is None:
        config = get_logging_config()

    _setup_logger_internal(config)


def setup_logger(
    log_dir: Path | str = Path("logs"),
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    *,
    enable_file: bool = True,
) -> None:
    """Initialize the logger with minimal configuration.

    Args:
        log_dir: Directory for log files (default: "logs")
        console_level: Console output level (default: "INFO")
        file_level: File output level (default: "DEBUG")
        enable_file: Also write to a rotated file under log_dir
    """
    config = LoggingConfig(
        log_dir=Path(log_dir),
        console_level=console_level,  # type: ignore[arg-type]
        file_level=file_level,  # type: ignore[arg-type]
        enable_file=enable_file,
    )
    _setup_logger_internal(config)


def _setup_logger_internal(config: LoggingConfig) -> None:
    """Internal logger setup using config object."""
    logger.remove()

    # 1. Console Handler (Human-readable)
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT_DEFAULT,
        level=config.console_level,
        colorize=True,
        backtrace=config.backtrace,
        diagnose=config.diagnose,
    )

    # 2. File Handler
    if config.enable_file:
        log_path = Path(config.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        if config.json_logs:
            _setup_json_file_sink(log_path, config)
        else:
            _setup_text_file_sink(log_path, config)

    logger.debug(
        "Logger initialized",
        log_dir=str(config.log_dir),
        console_level=config.console_level,
        file_level=config.file_level,
    )


def _setup_json_file_sink(log_path: Path, config: LoggingConfig) -> None:
    """Set up JSON (serialized) file sink with rotation."""
    logger.add(
        log_path / f"{config.file_stem}_{{time:YYYY-MM-DD}}.json",
        level=config.file_level,
        serialize=True,
        rotation=config.rotation,
        retention=config.retention,
        compression=config.compression,
        enqueue=True,
        backtrace=config.backtrace,
        diagnose=False,
    )


def _setup_text_file_sink(log_path: Path, config: LoggingConfig) -> None:
    """Set up text file sink with loguru's built-in rotation."""
    logger.add(
        log_path / f"{config.file_stem}_{{time:YYYY-MM-DD}}.log",
        format=CONSOLE_FORMAT_DEFAULT,
        level=config.file_level,
        rotation=config.rotation,
        retention=config.retention,
        compression=config.compression,
        enqueue=True,
        backtrace=config.backtrace,
        diagnose=False,
    )


def get_context_logger(**extra: object) -> Logger:
    """Get a logger with arbitrary context bound.

    Example:
        >>> log = get_context_logger(drill_id=3, operation="practice")
        >>> log.info("Practice recorded")
    """
    return logger.bind(**extra)


__all__ = [
    "get_context_logger",
    "logger",
    "setup_logger",
    "setup_logger_from_config",
]
