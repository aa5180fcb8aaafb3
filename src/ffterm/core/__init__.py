"""Core module - Configuration, errors, and logging."""

from .config import (
    BannerConfig,
    ConsoleConfig,
    LoggingConfig,
    RunnerConfig,
    TableConfig,
    TerminalConfig,
    load_config,
)
from .errors import (
    CommandError,
    CommandFailedError,
    CommandStartError,
    CommandTimeoutError,
    ConfigError,
    FFTermError,
)
from .log import setup_logging

__all__ = [
    # Config
    "BannerConfig",
    "ConsoleConfig",
    "LoggingConfig",
    "RunnerConfig",
    "TableConfig",
    "TerminalConfig",
    "load_config",
    # Errors
    "FFTermError",
    "ConfigError",
    "CommandError",
    "CommandStartError",
    "CommandFailedError",
    "CommandTimeoutError",
    # Logging
    "setup_logging",
]
