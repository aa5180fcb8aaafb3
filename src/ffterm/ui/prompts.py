"""
Interactive Prompts for User Input

Question descriptors in the shape ``{type, name, message, initial}``
are answered through rich prompts.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from rich.console import Console
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt

logger = logging.getLogger(__name__)

Question = Mapping[str, Any]


class InteractivePrompt:
    """
    Interactive prompt handler for CLI.

    Supports text, password, confirm, number and select questions.
    """

    QUESTION_TYPES = ("text", "password", "confirm", "number", "select")

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def text(
        self,
        message: str,
        default: Optional[str] = None,
        password: bool = False,
    ) -> str:
        """Prompt for text input."""
        return Prompt.ask(message, console=self.console, password=password, **_default(default))

    def confirm(self, message: str, default: bool = False) -> bool:
        """
        Prompt for yes/no confirmation.

        Args:
            message: Prompt message
            default: Answer used when the user just presses enter

        Returns:
            Boolean response
        """
        return Confirm.ask(message, console=self.console, default=default)

    def number(
        self,
        message: str,
        default: Optional[Union[int, float]] = None,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        float_allowed: bool = False,
    ) -> Union[int, float]:
        """
        Prompt for a number.

        Args:
            message: Prompt message
            default: Default value
            min_value: Minimum allowed value
            max_value: Maximum allowed value
            float_allowed: Accept decimals instead of integers only

        Returns:
            Numeric response
        """
        prompt_cls = FloatPrompt if float_allowed else IntPrompt

        while True:
            result = prompt_cls.ask(message, console=self.console, **_default(default))

            if min_value is not None and result < min_value:
                self.console.print(f"[red]Value must be >= {min_value}[/red]")
                continue

            if max_value is not None and result > max_value:
                self.console.print(f"[red]Value must be <= {max_value}[/red]")
                continue

            return result

    def select(
        self,
        message: str,
        choices: Sequence[Any],
        default: Optional[Any] = None,
    ) -> Any:
        """
        Prompt for selection from choices.

        Choices may be plain values or ``{"title", "value"}`` mappings;
        the user answers with a number or a title.

        Returns:
            The selected value
        """
        titles = [str(_choice_title(c)) for c in choices]
        values = [_choice_value(c) for c in choices]

        self.console.print(f"\n[bold]{message}[/bold]")
        for i, title in enumerate(titles, 1):
            marker = "*" if default is not None and values[i - 1] == default else " "
            self.console.print(f"  {marker} {i}. {title}", markup=False)

        default_answer = None
        if default is not None and default in values:
            default_answer = str(values.index(default) + 1)

        while True:
            response = Prompt.ask(
                "Enter number or value",
                console=self.console,
                **_default(default_answer),
            )

            try:
                idx = int(response) - 1
                if 0 <= idx < len(values):
                    return values[idx]
            except (TypeError, ValueError):
                pass

            if response in titles:
                return values[titles.index(response)]

            self.console.print("[red]Invalid choice. Please try again.[/red]")

    def ask(self, question: Question) -> Any:
        """Answer a single question descriptor."""
        q_type = question.get("type", "text")
        message = question.get("message") or question.get("name", "")
        initial = question.get("initial")

        if q_type == "text":
            return self.text(message, default=initial)
        if q_type == "password":
            return self.text(message, password=True)
        if q_type == "confirm":
            return self.confirm(message, default=bool(initial))
        if q_type == "number":
            return self.number(
                message,
                default=initial,
                min_value=question.get("min"),
                max_value=question.get("max"),
                float_allowed=question.get("float", False),
            )
        if q_type == "select":
            choices = question["choices"]
            default = initial
            # An integer initial indexes into the choices
            if isinstance(initial, int) and not isinstance(initial, bool):
                default = _choice_value(choices[initial])
            return self.select(message, choices, default=default)

        raise ValueError(f"Unsupported question type: {q_type!r}")

    def prompt(
        self,
        questions: Union[Question, List[Question]],
    ) -> Dict[str, Any]:
        """
        Answer one or more question descriptors.

        Args:
            questions: A descriptor or list of descriptors

        Returns:
            Dictionary of answers keyed by question name
        """
        if isinstance(questions, Mapping):
            questions = [questions]

        answers: Dict[str, Any] = {}
        for question in questions:
            name = question.get("name") or question.get("message")
            if not name:
                raise ValueError("Question needs a name or message")
            answers[name] = self.ask(question)
            logger.debug("Answered %s", name)

        return answers


def _default(value: Any) -> Dict[str, Any]:
    # rich treats an explicit default=None as "empty input returns None"
    return {} if value is None else {"default": value}


def _choice_title(choice: Any) -> Any:
    if isinstance(choice, Mapping):
        return choice.get("title", choice.get("value"))
    return choice


def _choice_value(choice: Any) -> Any:
    if isinstance(choice, Mapping):
        return choice.get("value", choice.get("title"))
    return choice
