from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from .models import Item


def term_matches(term: str, item: Item) -> bool:
    """
    One search term against one task:
      @ctx   context, +tag   tag, #N   line number,
      anything else is a case-insensitive substring of the description.
    """
    if term.startswith("@"):
        return item.has_context(term)
    if term.startswith("+"):
        return item.has_tag(term)
    if term.startswith("#") and term[1:].isdigit():
        return item.line_number == int(term[1:])
    return term.lower() in item.description.lower()


@dataclass
class SearchTerms:
    terms: List[str] = field(default_factory=list)

    def item_matches(self, item: Item) -> bool:
        """True if at least one term matches."""
        return any(term_matches(t, item) for t in self.terms)


def find_items(terms: Iterable[str], items: Iterable[Item]) -> List[Item]:
    """Items matching every term."""
    results = list(items)
    for term in terms:
        results = [i for i in results if term_matches(term, i)]
    return results
