from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Optional

from dateutil import parser as dtparser
from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

DATE_FORMAT = "%Y-%m-%d"

_STRICT_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_WEEKDAYS = {
    "monday": MO, "mon": MO,
    "tuesday": TU, "tue": TU, "tues": TU,
    "wednesday": WE, "wed": WE,
    "thursday": TH, "thu": TH, "thurs": TH,
    "friday": FR, "fri": FR,
    "saturday": SA, "sat": SA,
    "sunday": SU, "sun": SU,
}

_OFFSETS = {
    "yesterday": -1,
    "today": 0,
    "tomorrow": 1,
    "overmorrow": 2,
}

_RELATIVE = re.compile(r"^in\s+(\d+)\s+(day|week|month)s?$")


def parse_date(text: Optional[str]) -> Optional[date]:
    """Strict YYYY-MM-DD parsing. Anything else is treated as absent."""
    if not text or not _STRICT_DATE.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


@dataclass(frozen=True)
class Calendar:
    """
    A fixed "today" and the boundaries derived from it.

    Urgencies are computed against one snapshot so that a run which straddles
    midnight gives consistent answers. Weeks run Monday to Sunday.
    """

    today: date

    @classmethod
    def current(cls) -> "Calendar":
        return _process_calendar()

    @property
    def yesterday(self) -> date:
        return self.today - timedelta(days=1)

    @property
    def soon(self) -> date:
        return self.today + timedelta(days=2)

    @property
    def end_of_week(self) -> date:
        return self.today + timedelta(days=6 - self.today.weekday())

    @property
    def end_of_next_week(self) -> date:
        return self.end_of_week + timedelta(days=7)

    @property
    def end_of_next_month(self) -> date:
        # Last day of the month after this one.
        first_of_following = date(self.today.year, self.today.month, 1) + relativedelta(months=2)
        return first_of_following - timedelta(days=1)

    @property
    def later(self) -> date:
        return self.today + timedelta(days=183)


@lru_cache(maxsize=None)
def _process_calendar() -> Calendar:
    return Calendar(date.today())


def interpret_date(text: str, calendar: Optional[Calendar] = None) -> Optional[date]:
    """
    Best-effort reading of a loosely written date such as "tomorrow",
    "next_friday", "in 3 weeks" or "1 March 2025".

    Returns None if the text cannot be understood or the date it names is
    out of range.
    """
    cal = calendar or Calendar.current()
    phrase = " ".join(text.replace("_", " ").lower().split())
    if not phrase:
        return None
    try:
        return _interpret_phrase(phrase, cal)
    except (ValueError, OverflowError):
        return None


def _interpret_phrase(phrase: str, cal: Calendar) -> Optional[date]:
    if phrase in _OFFSETS:
        return cal.today + timedelta(days=_OFFSETS[phrase])

    if phrase == "next week":
        return cal.end_of_next_week
    if phrase == "next month":
        return cal.end_of_next_month

    words = phrase.split(" ")
    if len(words) == 2 and words[0] in ("next", "this") and words[1] in _WEEKDAYS:
        return cal.today + relativedelta(days=+1, weekday=_WEEKDAYS[words[1]](+1))
    if len(words) == 1 and words[0] in _WEEKDAYS:
        return cal.today + relativedelta(weekday=_WEEKDAYS[words[0]](+1))

    m = _RELATIVE.match(phrase)
    if m:
        n, unit = int(m.group(1)), m.group(2)
        if unit == "day":
            return cal.today + timedelta(days=n)
        if unit == "week":
            return cal.today + timedelta(weeks=n)
        return cal.today + relativedelta(months=n)

    default = datetime(cal.today.year, cal.today.month, cal.today.day)
    return dtparser.parse(phrase, default=default).date()
