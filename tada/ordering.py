from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Callable, Dict, Iterable, List, TypeVar

from .exceptions import InvalidSortOrder
from .models import (
    DEFAULT_IMPORTANCE,
    DEFAULT_SIZE,
    DEFAULT_URGENCY,
    Importance,
    Item,
    TshirtSize,
    Urgency,
)

K = TypeVar("K")


def _due_key(item: Item) -> tuple:
    due = item.due_date
    # Tasks without a due date come first.
    return (due is not None, due or date.min)


class SortOrder(Enum):
    URGENCY = "urgency"
    IMPORTANCE = "importance"
    SIZE = "size"
    ALPHABETICAL = "alpha"
    DUE_DATE = "due"
    ORIGINAL = "original"
    SMART = "smart"

    @classmethod
    def from_string(cls, name: str) -> "SortOrder":
        """The only place a user-supplied sort name becomes a SortOrder."""
        try:
            return _ALIASES[name.lower()]
        except KeyError:
            raise InvalidSortOrder(name) from None

    def key(self) -> Callable[[Item], object]:
        return _KEYS[self]

    def sort_items(self, items: Iterable[Item]) -> List[Item]:
        # sorted() is stable, so equal keys keep their input order.
        return sorted(items, key=self.key())


_ALIASES = {
    "urgency": SortOrder.URGENCY,
    "urgent": SortOrder.URGENCY,
    "urg": SortOrder.URGENCY,
    "importance": SortOrder.IMPORTANCE,
    "import": SortOrder.IMPORTANCE,
    "imp": SortOrder.IMPORTANCE,
    "important": SortOrder.IMPORTANCE,
    "tshirtsize": SortOrder.SIZE,
    "size": SortOrder.SIZE,
    "tshirt": SortOrder.SIZE,
    "quick": SortOrder.SIZE,
    "alphabetical": SortOrder.ALPHABETICAL,
    "alphabet": SortOrder.ALPHABETICAL,
    "alpha": SortOrder.ALPHABETICAL,
    "due-date": SortOrder.DUE_DATE,
    "duedate": SortOrder.DUE_DATE,
    "due": SortOrder.DUE_DATE,
    "original": SortOrder.ORIGINAL,
    "orig": SortOrder.ORIGINAL,
    "smart": SortOrder.SMART,
}

_KEYS: Dict[SortOrder, Callable[[Item], object]] = {
    SortOrder.URGENCY: lambda i: i.urgency or DEFAULT_URGENCY,
    SortOrder.IMPORTANCE: lambda i: i.importance or DEFAULT_IMPORTANCE,
    SortOrder.SIZE: lambda i: i.tshirt_size or DEFAULT_SIZE,
    SortOrder.ALPHABETICAL: lambda i: i.description.lower(),
    SortOrder.DUE_DATE: _due_key,
    SortOrder.ORIGINAL: lambda i: i.line_number,
    SortOrder.SMART: lambda i: i.smart_key(),
}


def _group(items: Iterable[Item], key: Callable[[Item], K], order: Iterable[K]) -> Dict[K, List[Item]]:
    """Bucket items by key; buckets come out in `order`, empty ones omitted."""
    buckets: Dict[K, List[Item]] = {k: [] for k in order}
    for item in items:
        buckets[key(item)].append(item)
    return {k: v for k, v in buckets.items() if v}


def group_by_urgency(items: Iterable[Item]) -> Dict[Urgency, List[Item]]:
    return _group(items, lambda i: i.urgency or DEFAULT_URGENCY, Urgency)


def group_by_importance(items: Iterable[Item]) -> Dict[Importance, List[Item]]:
    return _group(items, lambda i: i.importance or DEFAULT_IMPORTANCE, Importance)


def group_by_size(items: Iterable[Item]) -> Dict[TshirtSize, List[Item]]:
    return _group(items, lambda i: i.tshirt_size or DEFAULT_SIZE, TshirtSize)
