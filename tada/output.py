from __future__ import annotations

import random
from enum import Enum
from typing import IO, Optional

from rich.console import Console
from rich.prompt import Confirm
from rich.text import Text

from .dates import format_date
from .models import Importance, Item
from .store import TodoList

MIN_WIDTH = 48

IMPORTANCE_STYLES = {
    Importance.A: "bold red",
    Importance.B: "bold yellow",
    Importance.C: "bold green",
}

ZEN_QUOTES = (
    "The nearer a man comes to a calm mind, the closer he is to strength.",
    "It is in your power to withdraw yourself whenever you desire. Perfect tranquility\n"
    "within consists in the good ordering of the mind, the realm of your own.",
    "All sorrows are destroyed upon attainment of tranquility. The intellect of such\n"
    "a tranquil person soon becomes completely steady.",
    "A samurai must remain calm at all times even in the face of danger.",
    "Those who are free of resentful thoughts surely find peace.",
    "Passaddhi, calm or tranquillity, is the fifth factor of enlightenment.",
    "You are the sky. Everything else... it's just the weather.",
    "The pursuit, even of the best things, ought to be calm and tranquil.",
    "We think a happy life consists in tranquility of mind.",
    "Tranquillity is a fertile soil where you can plant and reap the solutions!",
    "I never lose; either win or learn.",
    "The noonday quiet holds the hill.",
    "No snowflake ever falls in the wrong place.",
    "When you reach the top of the mountain, keep climbing.",
)


class Outputter:
    """Pretty, width-limited output of tasks. Not todo.txt format!"""

    def __init__(self, width: int = 80, colour: bool = False, stream: Optional[IO[str]] = None) -> None:
        self.width = width
        self.colour = colour
        self.with_creation_date = False
        self.with_completion_date = False
        self.with_line_numbers = False
        self.with_newline = True
        self.line_number_digits = 2
        self.console = Console(
            file=stream,
            width=width,
            force_terminal=True if colour else None,
            color_system="standard" if colour else None,
            no_color=not colour,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    @classmethod
    def from_terminal(cls, colour: Optional[bool] = None, width: Optional[int] = None) -> "Outputter":
        term = Console()
        if colour is None:
            colour = term.is_terminal and term.color_system is not None
        return cls(max(width or term.width, MIN_WIDTH), colour)

    def _write(self, text: Text) -> None:
        self.console.print(text, end="\n" if self.with_newline else "")

    def write_heading(self, heading: str) -> None:
        self._write(Text(f"# {heading}", style="bold bright_white"))

    def write_separator(self) -> None:
        self.console.print()

    def write_status(self, status: str) -> None:
        self._write(Text(status, style="bright_white"))

    def write_notice(self, notice: str) -> None:
        self._write(Text(notice, style="magenta"))

    def write_error(self, error: str) -> None:
        self._write(Text(error, style="red"))

    def format_item(self, item: Item) -> Text:
        line = Text("x " if item.completion else "  ")

        if item.priority is None:
            line.append("(?) ")
        else:
            line.append("(")
            line.append(item.priority, style=IMPORTANCE_STYLES.get(item.importance, "bold"))
            line.append(") ")

        if self.with_completion_date:
            if item.completion and item.completion_date:
                line.append(format_date(item.completion_date) + " ")
            elif item.completion:
                line.append("????-??-?? ")
            else:
                line.append(" " * 11)

        if self.with_creation_date:
            if item.creation_date:
                line.append(format_date(item.creation_date) + " ")
            else:
                line.append("????-??-?? ")

        if self.with_line_numbers:
            line.append(f"#{item.line_number:0{self.line_number_digits}d} ")

        room = max(self.width - len(line.plain), 0)
        line.append(item.description[:room])

        if item.completion or not item.is_startable:
            return Text(line.plain, style="dim")
        return line

    def write_item(self, item: Item) -> None:
        self._write(self.format_item(item))


class ConfirmationStatus(Enum):
    YES = "yes"
    NO = "no"
    ASK = "ask"

    @classmethod
    def from_flags(cls, yes: bool, no: bool) -> "ConfirmationStatus":
        if no:
            return cls.NO
        if yes:
            return cls.YES
        return cls.ASK

    def check(self, outputter: Outputter, prompt: str, yes_phrase: str, no_phrase: str) -> bool:
        if self is ConfirmationStatus.ASK:
            answer = Confirm.ask(prompt, default=True, console=outputter.console)
        else:
            answer = self is ConfirmationStatus.YES
        outputter.write_notice(f"{yes_phrase if answer else no_phrase}\n")
        return answer


def housekeeping_warnings(outputter: Outputter, todo: TodoList) -> None:
    """Nudge the user when the list has collected clutter."""
    separated = False

    finished = todo.count_completed()
    if finished > 9:
        outputter.write_separator()
        separated = True
        outputter.write_notice(f"There are {finished} finished tasks. Consider running `tada archive`.")

    blank = todo.count_blank()
    if blank > 9:
        if not separated:
            outputter.write_separator()
        outputter.write_notice(f"There are {blank} blank/comment lines. Consider running `tada tidy`.")


def zen_quote() -> str:
    return random.choice(ZEN_QUOTES)
