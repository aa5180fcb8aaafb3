"""
Module-level helpers bound to a default Terminal.

``import ffterm; await ffterm.run("git status")`` works without
building a Terminal first. configure() replaces the default.
"""

import threading
from pathlib import Path
from typing import Any, Awaitable, Dict, List, Optional, Sequence, TypeVar, Union

from rich.console import RenderableType
from rich.panel import Panel
from rich.status import Status
from rich.text import Text

from .core.config import TerminalConfig, load_config
from .core.log import setup_logging
from .tools.runner import Command, CommandResult
from .ui.displays import ProgressBar
from .ui.prompts import Question
from .ui.terminal import Options, Terminal

T = TypeVar("T")

_terminal: Optional[Terminal] = None
_lock = threading.Lock()


def configure(
    config: Optional[TerminalConfig] = None,
    path: Optional[Union[str, Path]] = None,
) -> Terminal:
    """
    Build and install the default Terminal and attach log handlers.

    Args:
        config: Explicit configuration; takes precedence over ``path``
        path: YAML config file. If neither is given, the environment is used.

    Returns:
        The new default Terminal
    """
    global _terminal

    config = config or load_config(path)
    terminal = Terminal(config)
    setup_logging(config.logging)

    with _lock:
        _terminal = terminal
    return terminal


def get_terminal() -> Terminal:
    """
    Return the default Terminal, building it from the environment on first use.

    Log handlers are left alone here; only configure() installs them.
    """
    global _terminal

    if _terminal is None:
        with _lock:
            if _terminal is None:
                _terminal = Terminal(load_config())
    return _terminal


async def run(command: Command, options: Options = None, **overrides: Any) -> str:
    return await get_terminal().run(command, options, **overrides)


async def execute(command: Command, options: Options = None, **overrides: Any) -> CommandResult:
    return await get_terminal().execute(command, options, **overrides)


def run_sync(command: Command, options: Options = None, **overrides: Any) -> str:
    return get_terminal().run_sync(command, options, **overrides)


def get_current_dir() -> str:
    return get_terminal().get_current_dir()


def get_width() -> int:
    return get_terminal().get_width()


def get_height() -> int:
    return get_terminal().get_height()


def log(*objects: Any, **kwargs) -> None:
    get_terminal().log(*objects, **kwargs)


def color(text: str, style: str) -> Text:
    return get_terminal().color(text, style)


def box(renderable: RenderableType, **options) -> Panel:
    return get_terminal().box(renderable, **options)


def banner(title: RenderableType, **options) -> None:
    get_terminal().banner(title, **options)


def line(char: Optional[str] = None) -> None:
    get_terminal().line(char)


def table(data: Sequence[Sequence[Any]], **options) -> str:
    return get_terminal().table(data, **options)


def prompt(questions: Union[Question, List[Question]]) -> Dict[str, Any]:
    return get_terminal().prompt(questions)


def confirm(message: str, default_is_yes: bool = False) -> bool:
    return get_terminal().confirm(message, default_is_yes)


def spinner(text: str = "Working...", spinner: Optional[str] = None) -> Status:
    return get_terminal().spinner(text, spinner)


async def spinner_promise(
    awaitable: Awaitable[T],
    text: str = "Working...",
    success_text: Optional[str] = None,
    failure_text: Optional[str] = None,
) -> T:
    return await get_terminal().spinner_promise(awaitable, text, success_text, failure_text)


def progress_bar(label: str, total: Optional[float] = 100.0, transient: bool = False) -> ProgressBar:
    return get_terminal().progress_bar(label, total, transient)
