"""Logging settings for defense-drill.

Console and file sinks are configured from ``LOG_*`` environment variables
(or ``.env``). ``defense-drill attack run`` is a long-lived process, so the
file sink rotates and prunes old files on its own.

Rules Applied:
    - #11 Pydantic Modeling: Settings management, strict types
    - #15 Logging Standards: Configurable dual sinks
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Sink settings for the drill CLI and the alarm loop.

    Attributes:
        log_dir: Directory holding the rotated log files
        file_stem: Log file name prefix (``<stem>_<date>.log|json``)
        console_level: Minimum level printed to stderr
        file_level: Minimum level written to the file sink
        rotation / retention / compression: loguru file rotation options
        json_logs: Serialize file records as JSON lines
        enable_file: Disable to log to stderr only (one-shot CLI commands)
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_dir: Path = Field(default=Path("logs"), description="Directory for log files")
    file_stem: str = Field(
        default="defense_drill",
        min_length=1,
        description="Prefix of the rotated log file names",
    )

    console_level: LogLevel = Field(default="INFO", description="stderr sink level")
    file_level: LogLevel = Field(default="DEBUG", description="File sink level")

    # File rotation
    rotation: str = Field(default="10 MB", description="loguru rotation, e.g. '10 MB', '1 week'")
    retention: str = Field(default="14 days", description="How long rotated files are kept")
    compression: str = Field(default="gz", description="Compression of rotated files")
    json_logs: bool = Field(default=False, description="Write JSON lines instead of text")
    enable_file: bool = Field(default=True, description="Add the file sink at all")

    diagnose: bool = Field(
        default=False,
        description="Show variable values in tracebacks (leaks drill data, keep off)",
    )
    backtrace: bool = Field(default=True, description="Extend tracebacks past the catch point")


def get_logging_config() -> LoggingConfig:
    """Read LOG_* variables into a fresh LoggingConfig."""
    return LoggingConfig()
