"""
Tasks in the todo.txt format.

An Item keeps a handful of raw fields (completion flag, priority letter,
two dates and a description). Everything else (importance, due and start
dates, urgency, size, tags, contexts, key:value pairs) is derived from the
description or priority on first access and cached until either changes.

    >>> i = Item.parse("(A) clean my @home @L")
    >>> i.importance
    <Importance.A: 1>
    >>> i.tshirt_size
    <TshirtSize.LARGE: 3>
"""
from __future__ import annotations

import re
from datetime import date, timedelta
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .dates import Calendar, format_date, interpret_date, parse_date

RE_ITEM = re.compile(
    r"""
    ^
    (x\s+)?                         # completion marker
    (\([A-Z]\)\s+)?                 # priority letter
    (\d{4}-\d{2}-\d{2}\s+)?         # date
    (\d{4}-\d{2}-\d{2}\s+)?         # date
    (.*)                            # description
    $
    """,
    re.VERBOSE,
)
RE_KV = re.compile(r"([^\s:]+):([^\s:]+)")
RE_TAG = re.compile(r"(?:^|\s)\+(\S+)")
RE_CONTEXT = re.compile(r"(?:^|\s)@(\S+)")
RE_START = re.compile(r"start:[^\s:]+")

# Checked in this order; the first size with a matching context wins.
SIZE_PATTERNS = (
    ("SMALL", re.compile(r"X*S", re.IGNORECASE)),
    ("MEDIUM", re.compile(r"X*M", re.IGNORECASE)),
    ("LARGE", re.compile(r"X*L", re.IGNORECASE)),
)

WEEKDAY_CONTEXTS = ("work", "school")

LONG_DESCRIPTION = 120
SHORT_DESCRIPTION = 30


class Importance(IntEnum):
    A = 1
    B = 2
    C = 3
    D = 4
    E = 5

    @classmethod
    def from_letter(cls, letter: Optional[str]) -> Optional["Importance"]:
        """A-D map directly; every later letter counts as E."""
        if not letter or len(letter) != 1 or not ("A" <= letter <= "Z"):
            return None
        if letter in "ABCD":
            return cls[letter]
        return cls.E

    @property
    def letter(self) -> str:
        return self.name

    @property
    def label(self) -> str:
        return _IMPORTANCE_LABELS[self]


_IMPORTANCE_LABELS = {
    Importance.A: "Critical",
    Importance.B: "Important",
    Importance.C: "Semi-important",
    Importance.D: "Normal",
    Importance.E: "Unimportant",
}


class Urgency(IntEnum):
    OVERDUE = 1
    TODAY = 2
    SOON = 3
    THIS_WEEK = 4
    NEXT_WEEK = 5
    NEXT_MONTH = 6
    LATER = 7

    @classmethod
    def from_due_date(cls, due: date, calendar: Calendar) -> "Urgency":
        if due < calendar.today:
            return cls.OVERDUE
        if due == calendar.today:
            return cls.TODAY
        if due <= calendar.soon:
            return cls.SOON
        if due <= calendar.end_of_week:
            return cls.THIS_WEEK
        if due <= calendar.end_of_next_week:
            return cls.NEXT_WEEK
        if due <= calendar.end_of_next_month:
            return cls.NEXT_MONTH
        return cls.LATER

    def due_date(self, calendar: Calendar) -> date:
        """The date a task should be given to land in this urgency."""
        return {
            Urgency.OVERDUE: calendar.yesterday,
            Urgency.TODAY: calendar.today,
            Urgency.SOON: calendar.soon,
            Urgency.THIS_WEEK: calendar.end_of_week,
            Urgency.NEXT_WEEK: calendar.end_of_next_week,
            Urgency.NEXT_MONTH: calendar.end_of_next_month,
            Urgency.LATER: calendar.later,
        }[self]

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize()


class TshirtSize(IntEnum):
    SMALL = 1
    MEDIUM = 2
    LARGE = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


DEFAULT_URGENCY = Urgency.SOON
DEFAULT_IMPORTANCE = Importance.D
DEFAULT_SIZE = TshirtSize.MEDIUM

SmartKey = Tuple[Urgency, Importance, TshirtSize]
DateInterpreter = Callable[[str, Calendar], Optional[date]]


class Item:
    """One task from a todo list."""

    def __init__(
        self,
        description: str = "",
        *,
        completion: bool = False,
        priority: Optional[str] = None,
        completion_date: Optional[date] = None,
        creation_date: Optional[date] = None,
        line_number: int = 0,
        calendar: Optional[Calendar] = None,
    ) -> None:
        self.line_number = line_number
        self.completion = completion
        self.completion_date = completion_date
        self.creation_date = creation_date
        self.calendar = calendar or Calendar.current()
        self._priority = priority
        self._description = description
        self._cache: Dict[str, object] = {}

    @classmethod
    def parse(cls, text: str, calendar: Optional[Calendar] = None) -> "Item":
        """
        Parse one todo.txt line.

        Never fails: a date slot holding something that is not a real date is
        left for the description, along with everything after it.
        """
        m = RE_ITEM.match(text)
        if m is None:
            return cls(text.strip(), calendar=calendar)

        first = parse_date(m.group(3).strip()) if m.group(3) else None
        second = parse_date(m.group(4).strip()) if m.group(4) else None
        desc_start = m.start(5)
        if m.group(3) and first is None:
            desc_start, second = m.start(3), None
        elif m.group(4) and second is None:
            desc_start = m.start(4)

        if first and second:
            completion_date, creation_date = first, second
        else:
            completion_date, creation_date = None, first

        return cls(
            text[desc_start:].strip(),
            completion=m.group(1) is not None,
            priority=m.group(2)[1] if m.group(2) else None,
            completion_date=completion_date,
            creation_date=creation_date,
            calendar=calendar,
        )

    # ------------------------------------------------------------------ #
    # raw fields

    @property
    def priority(self) -> Optional[str]:
        return self._priority

    @priority.setter
    def priority(self, value: Optional[str]) -> None:
        self._priority = value
        self.invalidate()

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        self._description = value
        self.invalidate()

    def invalidate(self) -> None:
        """Forget every derived field at once."""
        self._cache.clear()

    def clear_completion_date(self) -> None:
        self.completion_date = None

    def clear_creation_date(self) -> None:
        self.creation_date = None

    # ------------------------------------------------------------------ #
    # derived fields

    def _derived(self, name: str, build: Callable[[], object]):
        if name not in self._cache:
            self._cache[name] = build()
        return self._cache[name]

    @property
    def importance(self) -> Optional[Importance]:
        return self._derived("importance", lambda: Importance.from_letter(self._priority))

    def set_importance(self, importance: Importance) -> None:
        self.priority = importance.letter

    def clear_importance(self) -> None:
        self.priority = None

    @property
    def kv(self) -> Dict[str, str]:
        kv = self._derived(
            "kv", lambda: {m.group(1): m.group(2) for m in RE_KV.finditer(self._description)}
        )
        return dict(kv)

    @property
    def tags(self) -> List[str]:
        return list(self._derived("tags", lambda: RE_TAG.findall(self._description)))

    @property
    def contexts(self) -> List[str]:
        return list(self._derived("contexts", lambda: RE_CONTEXT.findall(self._description)))

    @property
    def due_date(self) -> Optional[date]:
        return self._derived("due_date", lambda: parse_date(self.kv.get("due")))

    @property
    def start_date(self) -> Optional[date]:
        return self._derived("start_date", lambda: parse_date(self.kv.get("start")))

    @property
    def urgency(self) -> Optional[Urgency]:
        def build() -> Optional[Urgency]:
            due = self.due_date
            return Urgency.from_due_date(due, self.calendar) if due else None

        return self._derived("urgency", build)

    @property
    def tshirt_size(self) -> Optional[TshirtSize]:
        def build() -> Optional[TshirtSize]:
            contexts = self.contexts
            for name, pattern in SIZE_PATTERNS:
                if any(pattern.fullmatch(c) for c in contexts):
                    return TshirtSize[name]
            return None

        return self._derived("tshirt_size", build)

    @property
    def is_startable(self) -> bool:
        start = self.start_date
        return start is None or start <= self.calendar.today

    def has_tag(self, tag: str) -> bool:
        wanted = tag[1:] if tag.startswith("+") else tag
        wanted = wanted.lower()
        return any(t.lower() == wanted for t in self.tags)

    def has_context(self, ctx: str) -> bool:
        wanted = ctx[1:] if ctx.startswith("@") else ctx
        wanted = wanted.lower()
        return any(c.lower() == wanted for c in self.contexts)

    def smart_key(self) -> SmartKey:
        return (
            self.urgency or DEFAULT_URGENCY,
            self.importance or DEFAULT_IMPORTANCE,
            self.tshirt_size or DEFAULT_SIZE,
        )

    # ------------------------------------------------------------------ #
    # mutation

    def set_urgency(self, urgency: Urgency) -> None:
        """Rewrite the due date so the task lands in the given urgency."""
        d = urgency.due_date(self.calendar)
        if urgency > Urgency.TODAY and any(self.has_context(c) for c in WEEKDAY_CONTEXTS):
            if d.isoweekday() == 6:
                d -= timedelta(days=1)
            elif d.isoweekday() == 7:
                d -= timedelta(days=2)

        formatted = format_date(d)
        old = self.kv.get("due")
        if old is not None:
            self.description = self._description.replace(f"due:{old}", f"due:{formatted}")
        else:
            self.description = f"{self._description} due:{formatted}".strip()

    def but_done(self, include_date: bool = True) -> "Item":
        item = self.clone()
        item.completion = True
        if include_date:
            item.completion_date = self.calendar.today
            if item.creation_date is None:
                item.creation_date = self.calendar.today
        return item

    def but_pull(self, urgency: Urgency) -> "Item":
        """Reschedule to the given urgency and make the task startable today."""
        item = self.clone()
        item.set_urgency(urgency)
        item.description = RE_START.sub(
            f"start:{format_date(self.calendar.today)}", item.description, count=1
        )
        return item

    def zen(self) -> "Item":
        """Push an overdue task to a calmer due date; anything else is unchanged."""
        item = self.clone()
        if self.urgency != Urgency.OVERDUE:
            return item
        important = self.importance in (Importance.A, Importance.B)
        small = self.tshirt_size == TshirtSize.SMALL
        if important and small:
            item.set_urgency(Urgency.SOON)
        elif important or small:
            item.set_urgency(Urgency.NEXT_WEEK)
        else:
            item.set_urgency(Urgency.NEXT_MONTH)
        return item

    def fixup(self, interpret: DateInterpreter = interpret_date) -> Tuple["Item", List[str]]:
        """
        Tidy loosely written due/start dates and collect hints about the task.

        Returns the fixed copy and the list of notices; never fails.
        """
        item = self.clone()
        notices: List[str] = []

        if item.priority is None:
            notices.append(
                "Hint: a task can be given an importance be prefixing it with "
                "a parenthesized capital letter, like `(A)`."
            )

        for slot in ("due", "start"):
            given = item.kv.get(slot)
            if given is None:
                if slot == "due":
                    notices.append(
                        f"Hint: a task can be given a {slot} date by including `{slot}:YYYY-MM-DD`."
                    )
                continue
            if parse_date(given) is not None:
                continue
            found = interpret(given, item.calendar)
            if found is None:
                notices.append(f"Notice: {slot} date `{given}` should be in YYYY-MM-DD format.")
                continue
            item.description = item.description.replace(
                f"{slot}:{given}", f"{slot}:{format_date(found)}"
            )
            notices.append(f"Notice: {slot} date `{given}` changed to `{format_date(found)}`.")

        if item.tshirt_size is None:
            notices.append("Hint: a task can be given a size by including `@S`, `@M`, or `@L`.")

        if len(item.description) > LONG_DESCRIPTION:
            notices.append("Hint: long descriptions can make a task list slower to skim read.")
        elif len(item.description) < SHORT_DESCRIPTION:
            notices.append("Hint: short descriptions can make it hard to remember what a task means!")

        return item, notices

    # ------------------------------------------------------------------ #

    def clone(self) -> "Item":
        """An independent copy of the raw fields; derived fields start empty."""
        return Item(
            self._description,
            completion=self.completion,
            priority=self._priority,
            completion_date=self.completion_date,
            creation_date=self.creation_date,
            line_number=self.line_number,
            calendar=self.calendar,
        )

    __copy__ = clone

    def __deepcopy__(self, memo) -> "Item":
        return self.clone()

    def _raw(self) -> tuple:
        return (
            self.line_number,
            self.completion,
            self._priority,
            self.completion_date,
            self.creation_date,
            self._description,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self._raw() == other._raw()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"Item(completion={self.completion}, priority={self._priority!r}, "
            f"completion_date={self.completion_date}, creation_date={self.creation_date}, "
            f"description={self._description!r})"
        )

    def __str__(self) -> str:
        parts = []
        if self.completion:
            parts.append("x ")
        if self._priority:
            parts.append(f"({self._priority}) ")
        if self.completion and self.completion_date:
            parts.append(format_date(self.completion_date) + " ")
        if self.creation_date:
            parts.append(format_date(self.creation_date) + " ")
        parts.append(self._description)
        return "".join(parts)
