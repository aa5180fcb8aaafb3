"""
Tests for the Terminal helpers.
"""

import asyncio
import os

import pytest
from rich.panel import Panel
from rich.status import Status
from rich.text import Text

from conftest import py
from ffterm.core.config import BannerConfig, TerminalConfig
from ffterm.ui.displays import ProgressBar
from ffterm.ui.terminal import Terminal


class TestEnvironment:
    """Tests for environment accessors."""

    def test_width_and_height(self, terminal):
        """Test that dimensions come from the console."""
        assert terminal.get_width() == 60
        assert terminal.get_height() == terminal.console.height

    def test_current_dir(self, terminal):
        """Test the current directory."""
        assert terminal.get_current_dir() == os.getcwd()


class TestStyledOutput:
    """Tests for color, box, banner and line."""

    def test_color(self, terminal):
        """Test that color returns styled text."""
        text = terminal.color("ok", "bold green")

        assert isinstance(text, Text)
        assert text.plain == "ok"
        assert str(text.style) == "bold green"

    def test_box_fits_content(self, terminal):
        """Test that boxes do not expand by default."""
        panel = terminal.box("content", border_style="red")

        assert isinstance(panel, Panel)
        assert panel.expand is False
        assert panel.border_style == "red"

    def test_box_expand_override(self, terminal):
        """Test that expand can be requested."""
        assert terminal.box("content", expand=True).expand is True

    def test_banner(self, terminal, output):
        """Test banner output with default padding."""
        terminal.banner("Release 1.0")

        lines = output().splitlines()
        assert len(lines) == 3
        assert lines[1] == "│  Release 1.0  │"

    def test_banner_options_override_defaults(self, console, output):
        """Test that caller options win over configured defaults."""
        config = TerminalConfig(banner=BannerConfig(padding=(1, 4)))
        terminal = Terminal(config, console=console)

        terminal.banner("Hi", padding=(0, 1))

        assert output().splitlines()[1] == "│ Hi │"

    def test_line_default(self, terminal, output):
        """Test a full-width line."""
        terminal.line()

        assert output() == "─" * 60 + "\n"

    def test_line_multi_char(self, terminal, output):
        """Test a line made of a repeated pattern."""
        terminal.line("=-")

        assert output() == "=-" * 30 + "\n"

    def test_log(self, terminal, output):
        """Test the log helper."""
        terminal.log("deployed", 3)

        assert "deployed 3" in output()


class TestTable:
    """Tests for table rendering."""

    DATA = [
        ["Name", "Count"],
        ["apples", 3],
        ["pears", 12],
    ]

    def test_header_and_rows(self, terminal):
        """Test that all cells appear."""
        result = terminal.table(self.DATA)

        for cell in ("Name", "Count", "apples", "3", "pears", "12"):
            assert cell in result
        assert not result.endswith("\n")

    def test_header_first(self, terminal):
        """Test that row 0 is rendered as the header."""
        lines = terminal.table(self.DATA).splitlines()

        header_line = next(i for i, line in enumerate(lines) if "Name" in line)
        apples_line = next(i for i, line in enumerate(lines) if "apples" in line)
        assert header_line < apples_line

    def test_does_not_print(self, terminal, output):
        """Test that table only returns the string."""
        terminal.table(self.DATA)

        assert output() == ""

    def test_col_widths(self, terminal):
        """Test fixed column widths."""
        result = terminal.table([["a", "b"], ["x", "y"]], col_widths=[10, 4], box="ASCII")

        header = next(line for line in result.splitlines() if "a" in line)
        assert header == "| a          | b    |"

    def test_cell_metadata(self, terminal):
        """Test alignment metadata in cells."""
        data = [
            ["Item", "Qty"],
            [{"content": "x", "hAlign": "right"}, {"content": "1", "colSpan": 2}],
        ]
        result = terminal.table(data, col_widths=[6, 3], box="ASCII")

        row = next(line for line in result.splitlines() if "1" in line)
        assert row == "|      x | 1   |"

    def test_markup_not_interpreted(self, terminal):
        """Test that cell strings are literal text."""
        result = terminal.table([["h"], ["[bold]x[/bold]"]])

        assert "[bold]x[/bold]" in result

    def test_unknown_box(self, terminal):
        """Test that an unknown box style is rejected."""
        with pytest.raises(ValueError, match="Unknown box style"):
            terminal.table(self.DATA, box="NOPE")

    def test_empty(self, terminal):
        """Test that an empty grid renders nothing."""
        assert terminal.table([]) == ""

    def test_table_class_exposed(self):
        """Test that the rich Table class is available."""
        from rich.table import Table

        assert Terminal.Table is Table


class TestSpinner:
    """Tests for spinners."""

    def test_spinner_returns_status(self, terminal):
        """Test that spinner returns a rich Status."""
        status = terminal.spinner("Loading")

        assert isinstance(status, Status)

    def test_spinner_promise_success(self, terminal, output):
        """Test that the awaited value is returned."""
        async def work():
            return 42

        result = asyncio.run(terminal.spinner_promise(work(), "Loading", success_text="Loaded"))

        assert result == 42
        assert "✔ Loaded" in output()

    def test_spinner_promise_failure(self, terminal, output):
        """Test that failures propagate after the failure line."""
        async def work():
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError, match="nope"):
            asyncio.run(terminal.spinner_promise(work(), "Loading"))

        assert "✖ Loading" in output()

    def test_spinner_promise_with_run(self, terminal):
        """Test wrapping a command in a spinner."""
        result = asyncio.run(
            terminal.spinner_promise(terminal.run(py("print('hi')"), verbose=False), "Running")
        )

        assert result == "hi\n"


class TestProgressBar:
    """Tests for progress bars."""

    def test_advance(self, terminal):
        """Test advancing a bar."""
        bar = terminal.progress_bar("Copying", total=10)

        assert isinstance(bar, ProgressBar)
        with bar:
            bar.advance()
            bar.advance(4)

        assert bar.completed == 5
        assert bar.total == 10
        assert not bar.finished

    def test_complete(self, console):
        """Test marking a bar complete."""
        bar = ProgressBar("Copying", total=3, console=console)
        bar.start()
        bar.complete()
        bar.stop()

        assert bar.finished

    def test_update(self, console):
        """Test updating completed, total and description."""
        bar = ProgressBar("Copying", total=3, console=console)
        bar.update(completed=2, total=4, description="Moving")

        assert bar.completed == 2
        assert bar.total == 4
        assert bar.task.description == "Moving"

    def test_stop_without_start(self, console):
        """Test that stop is safe before start."""
        bar = ProgressBar("Idle", console=console)
        bar.stop()

        assert bar.completed == 0


class TestRunDelegation:
    """Tests for command helpers on the Terminal."""

    def test_run(self, terminal):
        """Test that run goes through the terminal's runner."""
        assert asyncio.run(terminal.run("echo hi", verbose=False)) == "hi\n"

    def test_execute(self, terminal):
        """Test that execute returns the result."""
        result = asyncio.run(terminal.execute("false", verbose=False))

        assert result.exit_code == 1

    def test_run_sync(self, terminal):
        """Test the blocking helper."""
        assert terminal.run_sync(["echo", "a b"], verbose=False) == "a b\n"
