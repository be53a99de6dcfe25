from pathlib import Path

import pytest

from tada import config
from tada.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ("TODO_FILE", "TODO_DIR", "DONE_FILE", "TADA_HTTP_USER_AGENT",
                "TADA_HTTP_AUTHORIZATION", "TADA_HTTP_FROM", "EDITOR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


def test_location_precedence(monkeypatch, tmp_path):
    assert config.todo_location() == str(tmp_path / "home" / "todo.txt")
    assert config.done_location() == str(tmp_path / "home" / "done.txt")

    monkeypatch.setenv("TODO_DIR", str(tmp_path / "lists"))
    assert config.todo_location() == str(tmp_path / "lists" / "todo.txt")
    assert config.done_location() == str(tmp_path / "lists" / "done.txt")

    monkeypatch.setenv("TODO_FILE", "/env/todo.txt")
    monkeypatch.setenv("DONE_FILE", "/env/done.txt")
    assert config.todo_location() == "/env/todo.txt"
    assert config.done_location() == "/env/done.txt"

    assert config.todo_location("cli.txt") == "cli.txt"
    assert config.done_location("cli-done.txt") == "cli-done.txt"


def test_local_lookup(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "TODO").write_text("a\n", encoding="utf-8")
    assert config.todo_location("ignored.txt", local=True) == str(tmp_path / "TODO")

    with pytest.raises(ConfigError):
        config.done_location(local=True)


def test_http_headers(monkeypatch):
    assert config.http_headers() == {}
    monkeypatch.setenv("TADA_HTTP_USER_AGENT", "tada-test")
    monkeypatch.setenv("TADA_HTTP_AUTHORIZATION", "Basic xyz")
    monkeypatch.setenv("TADA_HTTP_FROM", "me@example.com")
    assert config.http_headers() == {
        "User-Agent": "tada-test",
        "Authorization": "Basic xyz",
        "X-Tada-Authorization": "Basic xyz",
        "From": "me@example.com",
    }


def test_editor(monkeypatch):
    assert config.editor() == "vi"
    monkeypatch.setenv("EDITOR", "nano -w")
    assert config.editor() == "nano -w"
