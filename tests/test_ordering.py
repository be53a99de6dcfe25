from datetime import date

import pytest

from tada.dates import Calendar
from tada.exceptions import InvalidSortOrder
from tada.models import Importance, Item, TshirtSize, Urgency
from tada.ordering import SortOrder, group_by_importance, group_by_size, group_by_urgency

CAL = Calendar(date(2024, 5, 15))


def items(*texts):
    out = []
    for n, text in enumerate(texts, start=1):
        i = Item.parse(text, calendar=CAL)
        i.line_number = n
        out.append(i)
    return out


@pytest.mark.parametrize(
    "name,expected",
    [
        ("urgency", SortOrder.URGENCY),
        ("URG", SortOrder.URGENCY),
        ("important", SortOrder.IMPORTANCE),
        ("quick", SortOrder.SIZE),
        ("tshirtsize", SortOrder.SIZE),
        ("alphabet", SortOrder.ALPHABETICAL),
        ("due-date", SortOrder.DUE_DATE),
        ("orig", SortOrder.ORIGINAL),
        ("smart", SortOrder.SMART),
    ],
)
def test_from_string(name, expected):
    assert SortOrder.from_string(name) is expected


def test_from_string_unknown():
    with pytest.raises(InvalidSortOrder):
        SortOrder.from_string("sideways")
    with pytest.raises(ValueError):
        SortOrder.from_string("")


def test_sorts_are_stable():
    a, b, c, d = items("zeta @L", "alpha", "(A) mid", "beta @XL")
    assert SortOrder.SIZE.sort_items([a, b, c, d]) == [b, c, a, d]
    assert SortOrder.SIZE.sort_items([d, c, b, a]) == [c, b, d, a]


def test_alphabetical_ignores_case():
    a, b, c = items("banana", "Apple", "cherry")
    assert SortOrder.ALPHABETICAL.sort_items([a, b, c]) == [b, a, c]


def test_due_date_puts_undated_first():
    a, b, c = items("a due:2024-06-01", "b", "c due:2024-05-20")
    assert SortOrder.DUE_DATE.sort_items([a, b, c]) == [b, c, a]


def test_original_order():
    a, b, c = items("c", "a", "b")
    assert SortOrder.ORIGINAL.sort_items([c, a, b]) == [a, b, c]


def test_smart_order_puts_untagged_in_the_middle():
    plain1, urgent, plain2, lazy = items(
        "plain one", "(A) fire @S due:2024-05-14", "plain two", "(E) someday @L due:2025-01-01"
    )
    assert SortOrder.SMART.sort_items([lazy, plain1, urgent, plain2]) == [urgent, plain1, plain2, lazy]


def test_group_by_urgency():
    a, b, c = items("a due:2024-05-14", "b", "c due:2024-05-17")
    groups = group_by_urgency([a, b, c])
    assert list(groups) == [Urgency.OVERDUE, Urgency.SOON]
    assert groups[Urgency.SOON] == [b, c]


def test_group_by_importance():
    a, b, c = items("(B) a", "b", "(Z) c")
    groups = group_by_importance([a, b, c])
    assert list(groups) == [Importance.B, Importance.D, Importance.E]


def test_group_by_size():
    a, b = items("a @xs", "b")
    assert group_by_size([a, b]) == {TshirtSize.SMALL: [a], TshirtSize.MEDIUM: [b]}
