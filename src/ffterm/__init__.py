"""
ffterm - Terminal convenience helpers

One namespace for the things command-line tools keep reaching for:
- Running external commands with captured and live output
- Yes/no confirmation and question prompts
- Spinners and progress bars
- Colored text, boxed banners, lines and tables

Rendering is done by rich; ffterm fills in defaults.
"""

import logging

__version__ = "0.2.0"

# Core
from .core.config import TerminalConfig, load_config
from .core.errors import (
    FFTermError,
    ConfigError,
    CommandError,
    CommandStartError,
    CommandFailedError,
    CommandTimeoutError,
)
from .core.log import setup_logging

# Tools
from .tools.runner import CommandResult, CommandRunner, RunOptions

# UI
from .ui.terminal import Terminal
from .ui.displays import ProgressBar
from .ui.prompts import InteractivePrompt

# Module-level helpers
from .facade import (
    configure,
    get_terminal,
    run,
    execute,
    run_sync,
    get_current_dir,
    get_width,
    get_height,
    log,
    color,
    box,
    banner,
    line,
    table,
    prompt,
    confirm,
    spinner,
    spinner_promise,
    progress_bar,
)

Table = Terminal.Table

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core
    "TerminalConfig",
    "load_config",
    "setup_logging",
    "FFTermError",
    "ConfigError",
    "CommandError",
    "CommandStartError",
    "CommandFailedError",
    "CommandTimeoutError",
    # Tools
    "CommandResult",
    "CommandRunner",
    "RunOptions",
    # UI
    "Terminal",
    "ProgressBar",
    "InteractivePrompt",
    "Table",
    # Helpers
    "configure",
    "get_terminal",
    "run",
    "execute",
    "run_sync",
    "get_current_dir",
    "get_width",
    "get_height",
    "log",
    "color",
    "box",
    "banner",
    "line",
    "table",
    "prompt",
    "confirm",
    "spinner",
    "spinner_promise",
    "progress_bar",
]
