from __future__ import annotations

import argparse
import logging
import shlex
import subprocess
import sys
from typing import Callable, List, Optional

from . import actions, config
from .exceptions import InvalidSortOrder, TadaError
from .models import Urgency
from .ordering import SortOrder, group_by_importance, group_by_size, group_by_urgency
from .output import MIN_WIDTH, ConfirmationStatus, Outputter, housekeeping_warnings, zen_quote
from .search import SearchTerms, find_items
from .store import TodoList

VERSION = "0.1.0"

FIND_SHORTCUT_PREFIXES = ("@", "+", "#")


def _parse_sort(value: str) -> SortOrder:
    try:
        return SortOrder.from_string(value)
    except InvalidSortOrder as e:
        raise argparse.ArgumentTypeError(
            f"{e} Use smart, urgency, importance, size, alpha, due or orig."
        ) from e


def _parse_width(value: str) -> int:
    try:
        width = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid width '{value}'.") from e
    if width < MIN_WIDTH:
        raise argparse.ArgumentTypeError(f"max-width must be at least {MIN_WIDTH}!")
    return width


def _todo_location(ns: argparse.Namespace) -> str:
    return config.todo_location(getattr(ns, "file", None), getattr(ns, "local", False))


def _done_location(ns: argparse.Namespace) -> str:
    return config.done_location(getattr(ns, "done_file", None), getattr(ns, "local", False))


def _load_todo(ns: argparse.Namespace) -> TodoList:
    return TodoList.from_url(_todo_location(ns))


def _outputter(ns: argparse.Namespace, todo: Optional[TodoList] = None) -> Outputter:
    colour = None
    if getattr(ns, "no_colour", False):
        colour = False
    elif getattr(ns, "colour", False):
        colour = True
    out = Outputter.from_terminal(colour, getattr(ns, "max_width", None))
    out.with_creation_date = getattr(ns, "show_created", False)
    out.with_completion_date = getattr(ns, "show_finished", False)
    out.with_line_numbers = getattr(ns, "show_lines", False)
    if todo is not None:
        out.line_number_digits = len(str(len(todo.lines)))
    return out


def _sort_order(ns: argparse.Namespace, default: SortOrder) -> SortOrder:
    return ns.sort or default


def _confirmation(ns: argparse.Namespace) -> ConfirmationStatus:
    return ConfirmationStatus.from_flags(ns.yes, ns.no)


def cmd_add(ns: argparse.Namespace) -> int:
    opts = actions.AddOptions(
        no_date=ns.no_date,
        no_fixup=ns.no_fixup,
        urgency=ns.urgency,
        quiet=ns.quiet,
    )
    line, notices = actions.process_line(" ".join(ns.task), opts)
    if not opts.quiet:
        _outputter(ns).write_item(line.item)
        for notice in notices:
            print(notice, file=sys.stderr)
    TodoList.append_lines_to_url(_todo_location(ns), [line])
    return 0


def _write_grouped(out: Outputter, groups: dict, order: SortOrder) -> None:
    for key, items in groups.items():
        out.write_heading(key.label)
        for item in order.sort_items(items):
            out.write_item(item)
        out.write_separator()


def cmd_show(ns: argparse.Namespace) -> int:
    todo = _load_todo(ns)
    out = _outputter(ns, todo)
    order = _sort_order(ns, SortOrder.SMART)
    items = todo.items()

    if ns.group == "urgency":
        _write_grouped(out, group_by_urgency(items), order)
    elif ns.group == "importance":
        _write_grouped(out, group_by_importance(items), order)
    elif ns.group == "size":
        _write_grouped(out, group_by_size(items), order)
    else:
        for item in order.sort_items(items):
            out.write_item(item)

    housekeeping_warnings(out, todo)
    return 0


def _simple_list(selection: SortOrder) -> Callable[[argparse.Namespace], int]:
    def run(ns: argparse.Namespace) -> int:
        todo = _load_todo(ns)
        out = _outputter(ns, todo)
        for item in actions.select_items(todo, selection, ns.number, _sort_order(ns, selection)):
            out.write_item(item)
        return 0

    return run


cmd_important = _simple_list(SortOrder.IMPORTANCE)
cmd_urgent = _simple_list(SortOrder.URGENCY)
cmd_quick = _simple_list(SortOrder.SIZE)


def cmd_find(ns: argparse.Namespace) -> int:
    todo = _load_todo(ns)
    out = _outputter(ns, todo)
    for item in _sort_order(ns, SortOrder.SMART).sort_items(find_items(ns.terms, todo.items())):
        out.write_item(item)
    return 0


def cmd_done(ns: argparse.Namespace) -> int:
    location = _todo_location(ns)
    todo = TodoList.from_url(location)
    out = _outputter(ns, todo)
    new, count = actions.mark_items_done(
        todo, SearchTerms(ns.terms), _confirmation(ns), out, include_date=not ns.no_date
    )
    if count > 0:
        new.to_url(location)
        out.write_status(f"Marked {count} tasks complete!")
    else:
        out.write_status("No actions taken.")
    housekeeping_warnings(out, new)
    return 0


def cmd_remove(ns: argparse.Namespace) -> int:
    location = _todo_location(ns)
    todo = TodoList.from_url(location)
    out = _outputter(ns, todo)
    new, count = actions.remove_items(todo, SearchTerms(ns.terms), _confirmation(ns), out)
    if count > 0:
        new.to_url(location)
        out.write_status(f"Removed {count} tasks!")
    else:
        out.write_status("No actions taken.")
    return 0


def cmd_pull(ns: argparse.Namespace) -> int:
    location = _todo_location(ns)
    todo = TodoList.from_url(location)
    out = _outputter(ns, todo)
    new, count = actions.pull_items(
        todo, SearchTerms(ns.terms), ns.urgency or Urgency.TODAY, _confirmation(ns), out
    )
    if count > 0:
        new.to_url(location)
    housekeeping_warnings(out, new)
    return 0


def cmd_zen(ns: argparse.Namespace) -> int:
    location = _todo_location(ns)
    actions.zen_items(TodoList.from_url(location)).to_url(location)
    _outputter(ns).write_status(zen_quote())
    return 0


def cmd_tidy(ns: argparse.Namespace) -> int:
    location = _todo_location(ns)
    TodoList.from_url(location).but_tidy(_sort_order(ns, SortOrder.ORIGINAL)).to_url(location)
    return 0


def cmd_archive(ns: argparse.Namespace) -> int:
    todo_location = _todo_location(ns)
    done_location = _done_location(ns)
    keep, finished = actions.split_completed(TodoList.from_url(todo_location))
    if not finished:
        print(f"No complete tasks found in {todo_location}")
        return 0
    TodoList.append_lines_to_url(done_location, finished)
    keep.to_url(todo_location)
    print(f"Moved {len(finished)} tasks to {done_location}")
    return 0


def cmd_edit(ns: argparse.Namespace) -> int:
    command = shlex.split(config.editor()) + [_todo_location(ns)]
    try:
        return subprocess.call(command)
    except OSError as e:
        print(f"Could not run editor '{command[0]}': {e}", file=sys.stderr)
        return 1


def cmd_path(ns: argparse.Namespace) -> int:
    print(_todo_location(ns))
    return 0


# -------------------- argument groups --------------------
def _add_file_args(s: argparse.ArgumentParser, done: bool = False) -> None:
    s.add_argument("-f", "--file", metavar="FILE", help="the path or URL for todo.txt")
    s.add_argument("-l", "--local", action="store_true", help="look for files in local directory only")
    if done:
        s.add_argument("--done-file", metavar="FILE", help="the path or URL for done.txt")


def _add_output_args(s: argparse.ArgumentParser, minimal: bool = False) -> None:
    s.add_argument("--colour", "--color", action="store_true", help="coloured output")
    s.add_argument("--no-colour", "--no-color", action="store_true", help="plain output")
    if minimal:
        return
    s.add_argument("--max-width", type=_parse_width, metavar="COLS", help="maximum width of terminal output")
    s.add_argument("-L", "--show-lines", action="store_true", help="show line numbers for tasks")
    s.add_argument("--show-created", action="store_true", help="show 'created' dates for tasks")
    s.add_argument("--show-finished", action="store_true", help="show 'finished' dates for tasks")


def _add_sort_arg(s: argparse.ArgumentParser, default: SortOrder) -> None:
    s.add_argument(
        "-s",
        "--sort",
        type=_parse_sort,
        metavar="BY",
        help=f"sort by 'smart', 'urgency', 'importance', 'size', 'alpha', 'due' or 'orig' (default: {default.value})",
    )


def _add_count_arg(s: argparse.ArgumentParser) -> None:
    s.add_argument("-n", "--number", type=int, default=3, metavar="N", help="maximum number to show (default: 3)")


def _add_confirm_args(s: argparse.ArgumentParser) -> None:
    g = s.add_mutually_exclusive_group()
    g.add_argument("-y", "--yes", action="store_true", help="assume 'yes' to prompts")
    g.add_argument("-n", "--no", action="store_true", help="assume 'no' to prompts")


def _add_search_args(s: argparse.ArgumentParser) -> None:
    s.add_argument("terms", nargs="+", metavar="search-term", help="a tag, context, line number, or string")


def _add_urgency_args(s: argparse.ArgumentParser, verb: str) -> None:
    g = s.add_mutually_exclusive_group()
    g.add_argument("-T", "--today", dest="urgency", action="store_const", const=Urgency.TODAY,
                   help=f"{verb} a due date of today")
    g.add_argument("-S", "--soon", dest="urgency", action="store_const", const=Urgency.SOON,
                   help=f"{verb} a due date of overmorrow")
    g.add_argument("-W", "--next-week", dest="urgency", action="store_const", const=Urgency.NEXT_WEEK,
                   help=f"{verb} a due date the end of next week")
    g.add_argument("-M", "--next-month", dest="urgency", action="store_const", const=Urgency.NEXT_MONTH,
                   help=f"{verb} a due date the end of next month")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tada",
        description="tada: a todo.txt list manager.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    p.add_argument("-v", "--verbose", action="store_true", help="log list loading and saving")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("add", help="Add a task to the todo list.")
    s.add_argument("task", nargs="+", help="Task text (may use todo.txt features).")
    _add_file_args(s)
    _add_output_args(s)
    s.add_argument("--no-date", action="store_true", help="Don't automatically add a creation date to the task.")
    s.add_argument("--no-fixup", action="store_true", help="Don't try to fix task syntax.")
    s.add_argument("--quiet", action="store_true", help="Quieter output.")
    _add_urgency_args(s, "Include")
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("show", help="Show the full todo list.")
    _add_file_args(s)
    _add_output_args(s)
    _add_sort_arg(s, SortOrder.SMART)
    g = s.add_mutually_exclusive_group()
    g.add_argument("-i", "--importance", dest="group", action="store_const", const="importance",
                   help="Group by importance.")
    g.add_argument("-u", "--urgency", dest="group", action="store_const", const="urgency",
                   help="Group by urgency.")
    g.add_argument("-z", "--size", dest="group", action="store_const", const="size",
                   help="Group by tshirt size.")
    s.set_defaults(func=cmd_show, group=None)

    for name, aliases, about, func, default in (
        ("important", [], "Show the most important tasks.", cmd_important, SortOrder.IMPORTANCE),
        ("urgent", ["u"], "Show the most urgent tasks.", cmd_urgent, SortOrder.URGENCY),
        ("quick", ["q"], "Show the smallest tasks.", cmd_quick, SortOrder.SIZE),
    ):
        s = sub.add_parser(
            name,
            aliases=aliases,
            help=about,
            epilog="Ignores tasks which are marked as already complete or have a start date in the future.",
        )
        _add_file_args(s)
        _add_output_args(s)
        _add_count_arg(s)
        _add_sort_arg(s, default)
        s.set_defaults(func=func)

    s = sub.add_parser(
        "find",
        help="Search for a task.",
        epilog="Multiple search terms are combined with AND. Searches are case-insensitive.",
    )
    _add_file_args(s)
    _add_output_args(s)
    _add_sort_arg(s, SortOrder.SMART)
    _add_search_args(s)
    s.set_defaults(func=cmd_find)

    s = sub.add_parser("done", help="Mark a task or tasks as done.")
    _add_file_args(s)
    _add_output_args(s)
    _add_search_args(s)
    s.add_argument("--no-date", action="store_true", help="Don't automatically add a completion date to the task.")
    _add_confirm_args(s)
    s.set_defaults(func=cmd_done)

    s = sub.add_parser("remove", aliases=["rm"], help="Remove a task or tasks.")
    _add_file_args(s)
    _add_output_args(s)
    _add_search_args(s)
    _add_confirm_args(s)
    s.set_defaults(func=cmd_remove)

    s = sub.add_parser(
        "pull",
        help="Reschedule a task or tasks to be done today (or another date).",
        epilog="If a task has a start date, that will be set to today.",
    )
    _add_file_args(s)
    _add_output_args(s)
    _add_search_args(s)
    _add_urgency_args(s, "Set")
    _add_confirm_args(s)
    s.set_defaults(func=cmd_pull)

    s = sub.add_parser(
        "zen",
        help="Automatically reschedule overdue tasks.",
        epilog="Guesses a sensible new due date for every overdue task without asking.",
    )
    _add_file_args(s)
    _add_output_args(s, minimal=True)
    s.set_defaults(func=cmd_zen)

    s = sub.add_parser(
        "tidy",
        help="Remove blank lines and comments from a todo list.",
        epilog="This is the only command which will renumber tasks in your todo list.",
    )
    _add_file_args(s)
    _add_sort_arg(s, SortOrder.ORIGINAL)
    s.set_defaults(func=cmd_tidy)

    s = sub.add_parser("archive", help="Move completed tasks from todo.txt to done.txt.")
    _add_file_args(s, done=True)
    s.set_defaults(func=cmd_archive)

    s = sub.add_parser("edit", help="Open your todo list in your editor.", epilog="Uses the EDITOR environment variable.")
    _add_file_args(s)
    s.set_defaults(func=cmd_edit)

    s = sub.add_parser("path", help="Print the full path to your todo list.")
    _add_file_args(s)
    s.set_defaults(func=cmd_path)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0].startswith(FIND_SHORTCUT_PREFIXES):
        args.insert(0, "find")

    parser = build_parser()
    ns = parser.parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    try:
        return int(ns.func(ns))
    except TadaError as e:
        print(str(e), file=sys.stderr)
        return 1
