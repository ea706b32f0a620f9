from pathlib import Path

import pytest

from fsterm import resolve_path
from fsterm.path_utils import canonical_directory, is_within


def test_relative_paths_join_the_working_directory(tmp_path: Path) -> None:
    assert resolve_path("a/b.txt", tmp_path) == tmp_path / "a" / "b.txt"


def test_absolute_paths_pass_through(tmp_path: Path) -> None:
    absolute = str(tmp_path / "x" / ".." / "y")
    assert resolve_path(absolute, Path("/elsewhere")) == Path(absolute)


def test_resolution_does_not_touch_the_filesystem(tmp_path: Path) -> None:
    target = resolve_path("does/not/exist", tmp_path)
    assert not target.exists()


def test_canonical_directory_resolves_links(tmp_path: Path) -> None:
    (tmp_path / "real").mkdir()
    (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)
    assert canonical_directory(tmp_path / "link" / ".." / "real") == (tmp_path / "real").resolve()


def test_canonical_directory_rejects_files_and_missing(tmp_path: Path) -> None:
    (tmp_path / "f").write_text("")
    with pytest.raises(NotADirectoryError):
        canonical_directory(tmp_path / "f")
    with pytest.raises(FileNotFoundError):
        canonical_directory(tmp_path / "missing")


def test_is_within(tmp_path: Path) -> None:
    assert is_within(tmp_path / "a" / "b", tmp_path)
    assert is_within(tmp_path, tmp_path)
    assert not is_within(tmp_path.parent, tmp_path)
