from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional, Sequence

from .exceptions import ConfigError

TODO_NAMES = ("todo.txt", "TODO", "TODO.TXT", "ToDo", "ToDo.txt", "todo")
DONE_NAMES = ("done.txt", "DONE", "DONE.TXT", "Done", "Done.txt", "done")


def _find_local(names: Sequence[str]) -> str:
    cwd = Path.cwd()
    for name in names:
        candidate = cwd / name
        if candidate.is_file():
            return str(candidate)
    raise ConfigError(f"Could not find a file called {names[0]} or {names[1]} in the current directory!")


def _default_dir() -> Path:
    env = os.getenv("TODO_DIR")
    if env:
        return Path(env).expanduser()
    return Path.home()


def todo_location(file: Optional[str] = None, local: bool = False) -> str:
    """
    Path or URL of the todo list:
      --file, then TODO_FILE, then $TODO_DIR/todo.txt, then ~/todo.txt.

    With --local only the current directory is searched.
    """
    if local:
        return _find_local(TODO_NAMES)
    if file:
        return file
    env = os.getenv("TODO_FILE")
    if env:
        return env
    return str(_default_dir() / "todo.txt")


def done_location(file: Optional[str] = None, local: bool = False) -> str:
    """Same as todo_location, using --done-file, DONE_FILE and done.txt."""
    if local:
        return _find_local(DONE_NAMES)
    if file:
        return file
    env = os.getenv("DONE_FILE")
    if env:
        return env
    return str(_default_dir() / "done.txt")


def http_headers() -> Dict[str, str]:
    headers: Dict[str, str] = {}
    agent = os.getenv("TADA_HTTP_USER_AGENT")
    if agent:
        headers["User-Agent"] = agent
    auth = os.getenv("TADA_HTTP_AUTHORIZATION")
    if auth:
        headers["Authorization"] = auth
        headers["X-Tada-Authorization"] = auth
    sender = os.getenv("TADA_HTTP_FROM")
    if sender:
        headers["From"] = sender
    return headers


def editor() -> str:
    return os.getenv("EDITOR") or "vi"
