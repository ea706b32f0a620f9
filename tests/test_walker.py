from pathlib import Path

import pytest

from fsterm import walk


@pytest.fixture
def root(tmp_path: Path) -> Path:
    (tmp_path / "b" / "deep").mkdir(parents=True)
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b" / "b1.txt").write_text("b1")
    (tmp_path / "b" / "deep" / "leaf.txt").write_text("leaf")
    (tmp_path / "c.txt").write_text("c")
    return tmp_path


def rel(paths, root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


def test_walk_is_preorder_and_sorted(root: Path) -> None:
    assert rel(walk(root), root) == [
        ".",
        "a.txt",
        "b",
        "b/b1.txt",
        "b/deep",
        "b/deep/leaf.txt",
        "c.txt",
    ]


def test_walk_is_single_pass(root: Path) -> None:
    walker = walk(root)
    assert len(list(walker)) == 7
    assert list(walker) == []
    assert len(list(walk(root))) == 7


def test_walk_prune_skips_subtree(root: Path) -> None:
    paths = rel(walk(root, prune=lambda p: p.name == "b"), root)
    assert paths == [".", "a.txt", "c.txt"]


def test_walk_handles_deep_trees(tmp_path: Path) -> None:
    current = tmp_path
    for _ in range(200):
        current = current / "d"
    current.mkdir(parents=True)
    assert len(list(walk(tmp_path))) == 201


def test_walk_does_not_follow_directory_symlinks(root: Path) -> None:
    (root / "b" / "loop").symlink_to(root, target_is_directory=True)
    paths = rel(walk(root), root)
    assert "b/loop" in paths
    assert not any(path.startswith("b/loop/") for path in paths)


def test_walk_reports_listing_errors(root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import fsterm.walker as walker_module

    real_scandir = walker_module.os.scandir

    def flaky_scandir(path):
        if Path(path).name == "b":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(walker_module.os, "scandir", flaky_scandir)
    errors: list[OSError] = []
    paths = rel(walk(root, onerror=errors.append), root)
    assert paths == [".", "a.txt", "b", "c.txt"]
    assert len(errors) == 1

    with pytest.raises(PermissionError):
        list(walk(root))


def test_walk_of_a_file_yields_only_the_file(root: Path) -> None:
    assert list(walk(root / "a.txt")) == [root / "a.txt"]
