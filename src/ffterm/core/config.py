"""
Configuration for ffterm.

Every default the helpers apply (banner padding, spinner style,
runner error policy, log level) lives here so a Terminal can be
built from one explicit object instead of patched module state.
"""

import os
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.console import Console

from .errors import ConfigError


class ConsoleConfig(BaseModel):
    """Options passed to rich.console.Console."""
    force_terminal: Optional[bool] = Field(default=None, description="Force terminal control codes")
    no_color: bool = False
    width: Optional[int] = Field(default=None, gt=0)
    record: bool = False

    def build(self, stderr: bool = False) -> Console:
        """Create a console from these options."""
        return Console(
            force_terminal=self.force_terminal,
            no_color=self.no_color,
            width=self.width,
            record=self.record,
            stderr=stderr,
            log_path=False,
        )


class BannerConfig(BaseModel):
    """Defaults for banner boxes."""
    padding: Tuple[int, int] = Field(default=(0, 2), description="(vertical, horizontal) padding")
    border_style: str = "green"
    expand: bool = False

    def panel_kwargs(self) -> dict[str, Any]:
        return {
            "padding": self.padding,
            "border_style": self.border_style,
            "expand": self.expand,
        }


class TableConfig(BaseModel):
    """Defaults for rendered tables."""
    box: str = Field(default="SQUARE", description="Name of a box style in rich.box")
    header_style: str = "bold"
    show_lines: bool = False


class RunnerConfig(BaseModel):
    """Default options for the command runner."""
    verbose: bool = True
    throw_error: bool = False
    timeout: Optional[float] = Field(default=None, gt=0, description="Seconds before the child is killed")
    encoding: str = "utf-8"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="WARNING")
    file: Optional[str] = Field(default=None)
    rich_tracebacks: bool = True

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class TerminalConfig(BaseModel):
    """
    Master configuration for a Terminal.

    Nested sections map one-to-one onto the helper groups.
    """
    console: ConsoleConfig = Field(default_factory=ConsoleConfig)
    banner: BannerConfig = Field(default_factory=BannerConfig)
    table: TableConfig = Field(default_factory=TableConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    line_char: str = Field(default="─", min_length=1)
    spinner: str = Field(default="dots", description="Spinner name from rich.spinner")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TerminalConfig":
        """Load configuration from YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must contain a mapping")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e

    @classmethod
    def from_env(cls) -> "TerminalConfig":
        """Create configuration from environment variables."""
        config = cls()

        try:
            if level := os.getenv("FFTERM_LOG_LEVEL"):
                config.logging = LoggingConfig(level=level, file=config.logging.file)
            if log_file := os.getenv("FFTERM_LOG_FILE"):
                config.logging.file = log_file
            if (verbose := os.getenv("FFTERM_VERBOSE")) is not None:
                config.runner.verbose = _parse_bool(verbose)
            if (throw_error := os.getenv("FFTERM_THROW_ERROR")) is not None:
                config.runner.throw_error = _parse_bool(throw_error)
            if timeout := os.getenv("FFTERM_TIMEOUT"):
                config.runner = RunnerConfig(
                    **{**config.runner.model_dump(), "timeout": float(timeout)}
                )
        except (ValueError, ValidationError) as e:
            raise ConfigError(f"Invalid environment configuration: {e}") from e

        # https://no-color.org
        if os.getenv("NO_COLOR"):
            config.console.no_color = True

        return config

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        data = self.model_dump()
        data["banner"]["padding"] = list(self.banner.padding)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def load_config(path: Optional[str | Path] = None) -> TerminalConfig:
    """
    Load configuration from file or environment.

    Args:
        path: Optional path to YAML config file. If None, loads from environment.

    Returns:
        TerminalConfig instance
    """
    if path:
        return TerminalConfig.from_yaml(path)
    return TerminalConfig.from_env()
