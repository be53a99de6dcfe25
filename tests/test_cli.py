from pathlib import Path

import pytest

from tada import cli


@pytest.fixture
def todo(tmp_path: Path) -> Path:
    path = tmp_path / "todo.txt"
    path.write_text(
        "(A) write report @work\n"
        "(C) water plants +garden @home\n"
        "\n"
        "x 2024-01-02 2024-01-01 old thing\n",
        encoding="utf-8",
    )
    return path


def run(*argv):
    return cli.main(list(argv))


def test_add_appends_a_task(todo, capsys):
    assert run("add", "-f", str(todo), "--no-date", "--no-fixup", "--no-colour", "(B)", "pick", "up", "parcel") == 0
    assert todo.read_text(encoding="utf-8").endswith("\n(B) pick up parcel\n")
    assert "(B) pick up parcel" in capsys.readouterr().out


def test_add_quietly_with_fixup_notices(todo, capsys):
    assert run("add", "-f", str(todo), "--quiet", "--no-date", "hi") == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
    assert todo.read_text(encoding="utf-8").endswith("\nhi\n")


def test_add_prints_hints(todo, capsys):
    run("add", "-f", str(todo), "--no-date", "--no-colour", "hi")
    assert "Hint: a task can be given a due date" in capsys.readouterr().err


def test_add_creates_missing_file(tmp_path):
    path = tmp_path / "new" / "todo.txt"
    run("add", "-f", str(path), "--quiet", "--no-date", "--no-fixup", "first")
    assert path.read_text(encoding="utf-8") == "first\n"


def test_show(todo, capsys):
    assert run("show", "-f", str(todo), "--no-colour", "--sort", "alpha") == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["x (?) old thing", "  (C) water plants +garden @home", "  (A) write report @work"]


def test_show_grouped(todo, capsys):
    assert run("show", "-f", str(todo), "--no-colour", "-i") == 0
    out = capsys.readouterr().out
    assert "# Critical" in out
    assert "# Semi-important" in out
    assert out.index("write report") < out.index("water plants")


def test_invalid_sort_exits(todo, capsys):
    with pytest.raises(SystemExit):
        run("show", "-f", str(todo), "--sort", "sideways")
    assert "Unknown sort order 'sideways'" in capsys.readouterr().err


def test_important_skips_finished(todo, capsys):
    run("important", "-f", str(todo), "--no-colour", "-n", "5")
    assert capsys.readouterr().out.splitlines() == [
        "  (A) write report @work",
        "  (C) water plants +garden @home",
    ]


def test_find_shortcut(todo, capsys):
    assert run("@home", "-f", str(todo), "--no-colour") == 0
    assert capsys.readouterr().out.splitlines() == ["  (C) water plants +garden @home"]


def test_done(todo, capsys):
    assert run("done", "-f", str(todo), "--no-colour", "-y", "--no-date", "report") == 0
    assert todo.read_text(encoding="utf-8").splitlines()[0] == "x (A) write report @work"
    assert "Marked 1 tasks complete!" in capsys.readouterr().out


def test_done_declined_leaves_file(todo, capsys):
    before = todo.read_text(encoding="utf-8")
    assert run("done", "-f", str(todo), "--no-colour", "-n", "report") == 0
    assert todo.read_text(encoding="utf-8") == before
    assert "No actions taken." in capsys.readouterr().out


def test_remove_keeps_line_numbers(todo):
    assert run("rm", "-f", str(todo), "--no-colour", "-y", "#2") == 0
    assert todo.read_text(encoding="utf-8").splitlines()[:3] == ["(A) write report @work", "", ""]


def test_tidy(todo):
    assert run("tidy", "-f", str(todo), "-s", "importance") == 0
    assert todo.read_text(encoding="utf-8") == (
        "(A) write report @work\n"
        "(C) water plants +garden @home\n"
        "x 2024-01-02 2024-01-01 old thing\n"
    )


def test_archive(todo, tmp_path, capsys):
    done = tmp_path / "done.txt"
    assert run("archive", "-f", str(todo), "--done-file", str(done)) == 0
    assert done.read_text(encoding="utf-8") == "x 2024-01-02 2024-01-01 old thing\n"
    assert "old thing" not in todo.read_text(encoding="utf-8")
    assert f"Moved 1 tasks to {done}" in capsys.readouterr().out

    assert run("archive", "-f", str(todo), "--done-file", str(done)) == 0
    assert "No complete tasks found" in capsys.readouterr().out


def test_path(todo, capsys):
    assert run("path", "-f", str(todo)) == 0
    assert capsys.readouterr().out == f"{todo}\n"


def test_missing_file_reports_error(tmp_path, capsys):
    assert run("show", "-f", str(tmp_path / "absent.txt")) == 1
    assert "Could not read" in capsys.readouterr().err


def test_edit_runs_editor(todo, monkeypatch):
    calls = []
    monkeypatch.setenv("EDITOR", "myedit --wait")
    monkeypatch.setattr(cli.subprocess, "call", lambda cmd: calls.append(cmd) or 0)
    assert run("edit", "-f", str(todo)) == 0
    assert calls == [["myedit", "--wait", str(todo)]]
