"""
List-level operations behind the subcommands.

Each one builds a fresh TodoList rather than editing lines in place; the
caller decides whether to save it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .dates import Calendar
from .models import Item, Urgency
from .ordering import SortOrder
from .output import ConfirmationStatus, Outputter
from .search import SearchTerms
from .store import Line, TodoList


@dataclass
class AddOptions:
    no_date: bool = False
    no_fixup: bool = False
    urgency: Optional[Urgency] = None
    quiet: bool = False


def process_line(text: str, opts: AddOptions, calendar: Optional[Calendar] = None) -> Tuple[Line, List[str]]:
    """Turn user input into a line ready to append, plus any fixup notices."""
    item = Item.parse(text, calendar)
    if item.creation_date is None and not opts.no_date:
        item.creation_date = item.calendar.today
    if opts.urgency is not None:
        item.set_urgency(opts.urgency)
    notices: List[str] = []
    if not opts.no_fixup:
        item, notices = item.fixup()
    return Line.from_item(item), notices


def _confirm(
    item: Item,
    outputter: Outputter,
    status: ConfirmationStatus,
    prompt: str,
    yes_phrase: str,
    no_phrase: str,
) -> bool:
    outputter.write_item(item)
    return status.check(outputter, prompt, yes_phrase, no_phrase)


def mark_items_done(
    todo: TodoList,
    terms: SearchTerms,
    status: ConfirmationStatus,
    outputter: Outputter,
    include_date: bool = True,
) -> Tuple[TodoList, int]:
    new = TodoList(path=todo.path)
    count = 0
    for line in todo.lines:
        item = line.item
        if (
            item is not None
            and not item.completion
            and terms.item_matches(item)
            and _confirm(item, outputter, status, "Mark finished?", "Marking finished", "Skipping")
        ):
            count += 1
            new.lines.append(line.but_done(include_date))
        else:
            new.lines.append(line)
    return new, count


def remove_items(
    todo: TodoList,
    terms: SearchTerms,
    status: ConfirmationStatus,
    outputter: Outputter,
) -> Tuple[TodoList, int]:
    """Removed tasks are replaced by blank lines so line numbers stay put."""
    new = TodoList(path=todo.path)
    count = 0
    for line in todo.lines:
        item = line.item
        if (
            item is not None
            and terms.item_matches(item)
            and _confirm(item, outputter, status, "Remove?", "Removing", "Keeping")
        ):
            count += 1
            new.lines.append(Line.blank())
        else:
            new.lines.append(line)
    return new, count


def pull_items(
    todo: TodoList,
    terms: SearchTerms,
    urgency: Urgency,
    status: ConfirmationStatus,
    outputter: Outputter,
) -> Tuple[TodoList, int]:
    new = TodoList(path=todo.path)
    count = 0
    for line in todo.lines:
        item = line.item
        if (
            item is not None
            and not item.completion
            and terms.item_matches(item)
            and _confirm(item, outputter, status, "Reschedule?", "Rescheduling", "Skipping")
        ):
            count += 1
            new.lines.append(line.but_pull(urgency))
        else:
            new.lines.append(line)
    return new, count


def zen_items(todo: TodoList) -> TodoList:
    return TodoList([line.but_zen() for line in todo.lines], path=todo.path)


def split_completed(todo: TodoList) -> Tuple[TodoList, List[Line]]:
    """Separate finished tasks (for done.txt) from everything else."""
    keep = TodoList(path=todo.path)
    finished: List[Line] = []
    for line in todo.lines:
        if line.item is not None and line.item.completion:
            finished.append(Line(line.kind, line.text, line.item.clone()))
        else:
            keep.lines.append(line)
    return keep, finished


def select_items(todo: TodoList, selection: SortOrder, count: int, output: SortOrder) -> List[Item]:
    """The first `count` open, startable tasks by `selection`, re-sorted by `output`."""
    chosen = [i for i in selection.sort_items(todo.items()) if i.is_startable and not i.completion]
    return output.sort_items(chosen[:count])
