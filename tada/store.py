from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TYPE_CHECKING
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from .config import http_headers
from .dates import Calendar
from .exceptions import ListError
from .models import Item, Urgency

if TYPE_CHECKING:
    from .ordering import SortOrder

logger = logging.getLogger(__name__)

RE_LINE_BLANK = re.compile(r"^\s*$")
RE_LINE_COMMENT = re.compile(r"^\s*#")

HTTP_TIMEOUT = 10


class LineKind(Enum):
    ITEM = "item"
    COMMENT = "comment"
    BLANK = "blank"


@dataclass
class Line:
    kind: LineKind
    text: str = ""
    item: Optional[Item] = None
    num: int = 0

    @classmethod
    def blank(cls) -> "Line":
        return cls(LineKind.BLANK)

    @classmethod
    def from_text(cls, text: str, num: int = 0, calendar: Optional[Calendar] = None) -> "Line":
        if RE_LINE_BLANK.match(text):
            return cls(LineKind.BLANK, text, None, num)
        if RE_LINE_COMMENT.match(text):
            return cls(LineKind.COMMENT, text, None, num)
        item = Item.parse(text, calendar=calendar)
        item.line_number = num
        return cls(LineKind.ITEM, text, item, num)

    @classmethod
    def from_item(cls, item: Item) -> "Line":
        # The text is always re-derived from the item.
        return cls(LineKind.ITEM, str(item), item, 0)

    def but_done(self, include_date: bool = True) -> "Line":
        if self.item is None:
            return self
        return Line.from_item(self.item.but_done(include_date))

    def but_pull(self, urgency: Urgency) -> "Line":
        if self.item is None:
            return self
        return Line.from_item(self.item.but_pull(urgency))

    def but_zen(self) -> "Line":
        if self.item is None:
            return self
        return Line.from_item(self.item.zen())


@contextmanager
def http_session() -> Iterator[requests.Session]:
    session = requests.Session()
    session.headers.update(http_headers())
    try:
        yield session
    finally:
        session.close()


def _local_path(url: str) -> Optional[Path]:
    """Filesystem path for a plain path or file:// URL; None for http(s)."""
    parsed = urlparse(url)
    if parsed.scheme in ("http", "https"):
        return None
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ListError(f"Unsupported URL scheme: {url}")
    return Path(url).expanduser().resolve()


@dataclass
class TodoList:
    lines: List[Line] = field(default_factory=list)
    path: Optional[str] = None

    # -------------------- loading --------------------
    @classmethod
    def from_text(cls, text: str, calendar: Optional[Calendar] = None) -> "TodoList":
        return cls(
            [Line.from_text(t, n, calendar) for n, t in enumerate(text.splitlines(), start=1)]
        )

    @classmethod
    def from_items(cls, items: Iterable[Item]) -> "TodoList":
        return cls([Line.from_item(i.clone()) for i in items])

    @classmethod
    def from_file(cls, path: Path, calendar: Optional[Calendar] = None) -> "TodoList":
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ListError(f"Could not read {path}: {e.strerror or e}") from e
        todo = cls.from_text(text, calendar)
        todo.path = str(path)
        logger.debug("Loaded %d lines from %s", len(todo.lines), path)
        return todo

    @classmethod
    def from_http(cls, url: str, calendar: Optional[Calendar] = None) -> "TodoList":
        logger.debug("GET %s", url)
        with http_session() as session:
            try:
                r = session.get(url, timeout=HTTP_TIMEOUT)
            except requests.RequestException as e:
                raise ListError(f"Could not fetch {url}: {e}") from e
        if not r.ok:
            raise ListError(f"HTTP response: {r.status_code} {r.reason}")
        todo = cls.from_text(r.text, calendar)
        todo.path = url
        return todo

    @classmethod
    def from_url(cls, url: str, calendar: Optional[Calendar] = None) -> "TodoList":
        path = _local_path(url)
        if path is None:
            return cls.from_http(url, calendar)
        return cls.from_file(path, calendar)

    # -------------------- saving --------------------
    def to_text(self) -> str:
        return "".join(line.text + "\n" for line in self.lines)

    def to_file(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.to_text(), encoding="utf-8")
        except OSError as e:
            raise ListError(f"Could not write {path}: {e.strerror or e}") from e
        logger.debug("Wrote %d lines to %s", len(self.lines), path)

    def to_http(self, url: str) -> None:
        logger.debug("PUT %s", url)
        with http_session() as session:
            try:
                r = session.put(
                    url,
                    data=self.to_text().encode("utf-8"),
                    headers={"Content-Type": "text/plain"},
                    timeout=HTTP_TIMEOUT,
                )
            except requests.RequestException as e:
                raise ListError(f"Could not save {url}: {e}") from e
        if not r.ok:
            raise ListError(f"HTTP response: {r.status_code} {r.reason}")

    def to_url(self, url: str) -> None:
        path = _local_path(url)
        if path is None:
            self.to_http(url)
        else:
            self.to_file(path)

    @classmethod
    def append_lines_to_url(cls, url: str, lines: Iterable[Line]) -> None:
        path = _local_path(url)
        if path is not None and not path.exists():
            todo = cls()
        else:
            todo = cls.from_url(url)
        todo.lines.extend(lines)
        todo.to_url(url)

    # -------------------- queries --------------------
    def items(self) -> List[Item]:
        return [line.item for line in self.lines if line.item is not None]

    def count_items(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.ITEM)

    def count_blank(self) -> int:
        return sum(1 for line in self.lines if line.kind is not LineKind.ITEM)

    def count_completed(self) -> int:
        return sum(1 for item in self.items() if item.completion)

    def but_tidy(self, sort_order: "SortOrder") -> "TodoList":
        """Drop blank lines and comments, sorting what remains."""
        return TodoList.from_items(sort_order.sort_items(self.items()))
