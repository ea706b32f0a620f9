import io
from pathlib import Path

import pytest

from fsterm import CommandResult, IOFailure, Terminal


@pytest.fixture
def shell(tmp_path: Path) -> Terminal:
    (tmp_path / "a.txt").write_text("hi\nworld\n")
    (tmp_path / "sub").mkdir()
    return Terminal(tmp_path, home=tmp_path / "sub")


def test_pwd_prints_canonical_directory(shell: Terminal, tmp_path: Path) -> None:
    result = shell.execute("pwd", [])
    assert result.exit_code == 0
    assert result.stdout == f"{tmp_path.resolve()}\n"


def test_pwd_rejects_arguments(shell: Terminal) -> None:
    result = shell.execute("pwd", ["extra"])
    assert result.exit_code == 2
    assert "pwd" in result.stderr


def test_pwd_redirection_truncates_then_appends(shell: Terminal, tmp_path: Path) -> None:
    out = tmp_path / "out.txt"
    out.write_text("stale\n")
    assert shell.execute("pwd", [">", "out.txt"]).stdout == ""
    shell.execute("pwd", [">>", "out.txt"])
    expected = f"{tmp_path.resolve()}\n"
    assert out.read_text() == expected * 2


def test_cd_changes_resolution_root(shell: Terminal, tmp_path: Path) -> None:
    assert shell.execute("cd", ["sub"]).exit_code == 0
    assert shell.cwd == (tmp_path / "sub").resolve()
    shell.execute("touch", ["new.txt"])
    assert (tmp_path / "sub" / "new.txt").is_file()


def test_cd_canonicalizes_dot_dot_and_symlinks(shell: Terminal, tmp_path: Path) -> None:
    (tmp_path / "link").symlink_to(tmp_path / "sub", target_is_directory=True)
    shell.execute("cd", ["link"])
    assert shell.cwd == (tmp_path / "sub").resolve()
    shell.execute("cd", [".."])
    assert shell.cwd == tmp_path.resolve()


def test_cd_without_arguments_goes_home(shell: Terminal, tmp_path: Path) -> None:
    shell.execute("cd", [])
    assert shell.cwd == (tmp_path / "sub").resolve()


def test_cd_failures_leave_directory_unchanged(shell: Terminal) -> None:
    before = shell.cwd
    missing = shell.execute("cd", ["nowhere"])
    assert missing.exit_code == 1
    assert "does not exist" in missing.stderr
    not_dir = shell.execute("cd", ["a.txt"])
    assert "not a directory" in not_dir.stderr
    too_many = shell.execute("cd", ["sub", "sub"])
    assert too_many.exit_code == 2
    assert shell.cwd == before


def test_ls_numbers_entries_and_marks_directories(shell: Terminal) -> None:
    result = shell.execute("ls", [])
    assert result.stdout == "1-a.txt\n2-sub\\\n"


def test_ls_accepts_directory_operand(shell: Terminal, tmp_path: Path) -> None:
    (tmp_path / "sub" / "inner.txt").write_text("")
    assert shell.execute("ls", ["sub"]).stdout == "1-inner.txt\n"


def test_ls_redirects_to_file(shell: Terminal, tmp_path: Path) -> None:
    shell.execute("ls", [">", "listing.txt"])
    listing = (tmp_path / "listing.txt").read_text()
    assert "1-a.txt\n" in listing
    assert "sub\\\n" in listing


def test_ls_missing_directory_is_reported(shell: Terminal) -> None:
    result = shell.execute("ls", ["ghost"])
    assert result.exit_code == 1
    assert "does not exist" in result.stderr


def test_unknown_command(shell: Terminal) -> None:
    result = shell.execute("frobnicate", ["x"])
    assert result.exit_code == 127
    assert result.stderr == "Unknown command: frobnicate"


def test_command_names_are_case_insensitive(shell: Terminal, tmp_path: Path) -> None:
    assert shell.execute("PWD", []).stdout.strip() == str(tmp_path.resolve())


def test_unexpected_errors_do_not_escape(shell: Terminal) -> None:
    def boom(_: list[str]) -> CommandResult:
        raise RuntimeError("kaput")

    shell.register_command("boom", boom)
    result = shell.execute("boom", [])
    assert result.exit_code == 1
    assert result.stderr == "boom failed: kaput"


def test_dispatch_writes_to_console_streams(tmp_path: Path) -> None:
    out, err = io.StringIO(), io.StringIO()
    shell = Terminal(tmp_path, stdout=out, stderr=err)
    shell.dispatch("pwd", [])
    shell.dispatch("rmdir", ["missing"])
    assert out.getvalue() == f"{tmp_path.resolve()}\n"
    assert "does not exist" in err.getvalue()
    assert err.getvalue().endswith("\n")


def test_missing_start_directory_falls_back_to_canonical_home(tmp_path: Path) -> None:
    (tmp_path / "real").mkdir()
    shell = Terminal(tmp_path / "missing", home=tmp_path / "real" / ".." / "real")
    assert shell.cwd == (tmp_path / "real").resolve()


def test_unusable_home_fallback_raises(tmp_path: Path) -> None:
    with pytest.raises(IOFailure, match="Home directory"):
        Terminal(tmp_path / "missing", home=tmp_path / "also-missing")


def test_help_lists_commands(shell: Terminal) -> None:
    result = shell.execute("help", [])
    for name in ("cat", "cd", "cp", "ls", "mkdir", "pwd", "rm", "rmdir", "touch", "unzip", "wc", "zip"):
        assert f"  {name} - " in result.stdout
    assert "usage: wc file" in shell.execute("help", ["wc"]).stdout
    assert shell.execute("help", ["nope"]).exit_code == 2


def test_session_scenario(shell: Terminal) -> None:
    assert shell.execute("wc", ["a.txt"]).stdout == "2 2 8 a.txt\n"

    removed = shell.execute("rmdir", ["sub"])
    assert removed == CommandResult()
    assert not (shell.cwd / "sub").exists()

    again = shell.execute("rmdir", ["sub"])
    assert again.exit_code == 1
    assert "does not exist" in again.stderr

    assert shell.execute("cp", ["-r", ".", "backup"]).exit_code == 0
    assert shell.execute("cat", ["backup/a.txt"]).stdout == "hi\nworld\n"
