"""
Pytest configuration and fixtures for ffterm tests.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Make src importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ffterm import facade
from ffterm.core.config import RunnerConfig, TerminalConfig
from ffterm.tools.runner import CommandRunner
from ffterm.ui.terminal import Terminal


PYTHON = sys.executable


def py(code: str) -> list:
    """argv running ``code`` in a fresh interpreter."""
    return [PYTHON, "-c", code]


@pytest.fixture
def console():
    """Plain-text console writing to a StringIO."""
    return Console(
        file=io.StringIO(),
        width=60,
        color_system=None,
        force_terminal=False,
        legacy_windows=False,
        log_path=False,
    )


@pytest.fixture
def output(console):
    """Return everything written to the console fixture so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def streams():
    """Stand-ins for the parent's stdout, stderr and diagnostic streams."""
    return {
        "stdout": io.StringIO(),
        "stderr": io.StringIO(),
        "diagnostics": io.StringIO(),
    }


@pytest.fixture
def runner(streams):
    """Runner with captured tee and diagnostic streams."""
    return CommandRunner(RunnerConfig(), **streams)


@pytest.fixture
def terminal(console, runner):
    """Terminal bound to the StringIO console."""
    return Terminal(TerminalConfig(), console=console, runner=runner)


@pytest.fixture
def reset_default_terminal():
    """Restore the module-level default Terminal after a test."""
    previous = facade._terminal
    yield
    facade._terminal = previous
