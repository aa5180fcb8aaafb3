"""
Terminal facade over rich

One object carrying the console, the command runner and every
helper, so defaults come from a TerminalConfig rather than from
mutable module state.
"""

import logging
import os
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Sequence, TypeVar, Union

from rich import box as rich_box
from rich.console import Console, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text

from ..core.config import TerminalConfig
from ..tools.runner import Command, CommandResult, CommandRunner, RunOptions
from .displays import ProgressBar
from .prompts import InteractivePrompt, Question

logger = logging.getLogger(__name__)

T = TypeVar("T")

Options = Optional[Union[RunOptions, Mapping[str, Any]]]


class Terminal:
    """
    Main terminal helper.

    Provides command execution, styled output, tables, banners,
    prompts, spinners and progress bars with configured defaults.
    """

    # The rich class, for callers that need full control over a table
    Table = Table

    def __init__(
        self,
        config: Optional[TerminalConfig] = None,
        console: Optional[Console] = None,
        runner: Optional[CommandRunner] = None,
    ):
        self.config = config or TerminalConfig()
        self.console = console or self.config.console.build()
        self.runner = runner or CommandRunner(self.config.runner)
        self.prompts = InteractivePrompt(self.console)

    # Process execution

    async def run(self, command: Command, options: Options = None, **overrides: Any) -> str:
        """Run a command and return its stdout. See CommandRunner.run."""
        return await self.runner.run(command, options, **overrides)

    async def execute(
        self, command: Command, options: Options = None, **overrides: Any
    ) -> CommandResult:
        """Run a command and return the full CommandResult."""
        return await self.runner.execute(command, options, **overrides)

    def run_sync(self, command: Command, options: Options = None, **overrides: Any) -> str:
        """Blocking variant of run()."""
        return self.runner.run_sync(command, options, **overrides)

    # Environment

    def get_current_dir(self) -> str:
        return os.getcwd()

    def get_width(self) -> int:
        return self.console.width

    def get_height(self) -> int:
        return self.console.height

    # Output

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self.console.print(*args, **kwargs)

    def log(self, *objects: Any, **kwargs) -> None:
        """Print with a timestamp."""
        self.console.log(*objects, **kwargs)

    def color(self, text: str, style: str) -> Text:
        """Return ``text`` with a rich style such as ``"bold red"``."""
        return Text(text, style=style)

    def box(self, renderable: RenderableType, **options) -> Panel:
        """Wrap content in a border, sized to fit unless ``expand=True``."""
        options.setdefault("expand", False)
        return Panel(renderable, **options)

    def banner(self, title: RenderableType, **options) -> None:
        """Print ``title`` in a box using the configured banner defaults."""
        merged = {**self.config.banner.panel_kwargs(), **options}
        self.console.print(self.box(title, **merged))

    def line(self, char: Optional[str] = None) -> None:
        """Print a horizontal line across the terminal."""
        char = char or self.config.line_char
        self.console.print(
            char * (self.get_width() // len(char)),
            markup=False,
            highlight=False,
        )

    def table(self, data: Sequence[Sequence[Any]], **options) -> str:
        """
        Render a row-major grid as a table string.

        Row 0 is the header. Cells may be plain values or mappings with
        ``content`` plus ``hAlign``/``justify`` and ``style``.

        Args:
            data: Rows of cells
            **options: ``col_widths``, ``box`` (a rich.box name), and any
                rich.table.Table keyword

        Returns:
            Rendered table without a trailing newline
        """
        if not data:
            return ""

        cfg = self.config.table
        legacy_widths = options.pop("colWidths", None)
        col_widths: List[Optional[int]] = list(options.pop("col_widths", None) or legacy_widths or [])
        options.setdefault("header_style", cfg.header_style)
        options.setdefault("show_lines", cfg.show_lines)
        table = Table(box=_resolve_box(options.pop("box", cfg.box)), **options)

        for i, cell in enumerate(data[0]):
            width = col_widths[i] if i < len(col_widths) else None
            table.add_column(_cell(cell), width=width)

        for row in data[1:]:
            table.add_row(*[_cell(cell) for cell in row])

        with self.console.capture() as capture:
            self.console.print(table)
        return capture.get().rstrip("\n")

    # Interaction

    def prompt(self, questions: Union[Question, List[Question]]) -> Dict[str, Any]:
        """Ask question descriptors, returning answers keyed by name."""
        return self.prompts.prompt(questions)

    def confirm(self, message: str, default_is_yes: bool = False) -> bool:
        """Ask a yes/no question."""
        return self.prompts.confirm(message, default=default_is_yes)

    def spinner(self, text: str = "Working...", spinner: Optional[str] = None) -> Status:
        """Return a spinner; use it as a context manager or start()/stop() it."""
        return self.console.status(text, spinner=spinner or self.config.spinner)

    async def spinner_promise(
        self,
        awaitable: Awaitable[T],
        text: str = "Working...",
        success_text: Optional[str] = None,
        failure_text: Optional[str] = None,
    ) -> T:
        """
        Show a spinner while awaiting, then a success or failure line.

        Exceptions from the awaitable propagate after the failure line.
        """
        with self.spinner(text):
            try:
                result = await awaitable
            except Exception:
                self.console.print(f"[red]✖[/red] {escape(failure_text or text)}")
                raise

        self.console.print(f"[green]✔[/green] {escape(success_text or text)}")
        return result

    def progress_bar(
        self,
        label: str,
        total: Optional[float] = 100.0,
        transient: bool = False,
    ) -> ProgressBar:
        """Create a progress bar on this terminal's console."""
        return ProgressBar(label, total=total, console=self.console, transient=transient)


def _resolve_box(name: Union[str, rich_box.Box, None]) -> Optional[rich_box.Box]:
    if name is None or isinstance(name, rich_box.Box):
        return name
    resolved = getattr(rich_box, name.upper(), None)
    if not isinstance(resolved, rich_box.Box):
        raise ValueError(f"Unknown box style: {name!r}")
    return resolved


def _cell(value: Any) -> RenderableType:
    """Convert a table cell into a renderable."""
    if isinstance(value, Mapping):
        if value.get("colSpan", 1) != 1 or value.get("rowSpan", 1) != 1:
            logger.debug("Ignoring span on table cell %r", value.get("content"))
        return Text.from_ansi(
            str(value.get("content", "")),
            style=value.get("style", ""),
            justify=value.get("justify") or value.get("hAlign"),
        )
    if isinstance(value, (Text, Panel, Table)):
        return value
    return Text.from_ansi("" if value is None else str(value))
