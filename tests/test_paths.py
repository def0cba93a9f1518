"""Tests for :mod:`grove.core.paths`."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from grove.core.errors import ErrorCode, InvalidPathError
from grove.core.paths import PathKey, canonicalize, equal


def test_canonicalize_returns_absolute_resolved_key(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("x", encoding="utf-8")

    key = canonicalize(target)

    assert isinstance(key, PathKey)
    assert key.value == str(target.resolve())
    assert os.path.isabs(key.value)


def test_canonicalize_is_idempotent(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("x", encoding="utf-8")

    key = canonicalize(target)

    assert canonicalize(key) == key
    assert canonicalize(str(key)) == key
    assert canonicalize(Path(key)) == key


def test_relative_paths_are_anchored_at_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert canonicalize("a.txt") == canonicalize(tmp_path / "a.txt")
    assert canonicalize("./a.txt") == canonicalize(tmp_path / "a.txt")


def test_trailing_separator_and_dot_segments_normalize(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")

    assert canonicalize(str(tmp_path / "sub") + os.sep) == canonicalize(tmp_path / "sub")
    assert canonicalize(tmp_path / "sub" / ".." / "a.txt") == canonicalize(tmp_path / "a.txt")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinked_directories_share_identity(tmp_path: Path) -> None:
    real = tmp_path / "real"
    real.mkdir()
    (real / "a.txt").write_text("a", encoding="utf-8")
    link = tmp_path / "link"
    try:
        os.symlink(real, link, target_is_directory=True)
    except OSError:  # pragma: no cover - restricted platforms
        pytest.skip("cannot create symlinks here")

    assert canonicalize(link / "a.txt") == canonicalize(real / "a.txt")


def test_home_directory_is_expanded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / "in-home.txt").write_text("x", encoding="utf-8")

    assert canonicalize("~/in-home.txt") == canonicalize(tmp_path / "in-home.txt")


def test_missing_path_raises_invalid_path(tmp_path: Path) -> None:
    with pytest.raises(InvalidPathError) as excinfo:
        canonicalize(tmp_path / "missing.txt")

    assert excinfo.value.error_code == ErrorCode.INVALID_PATH
    assert excinfo.value.details["reason"] == "no such file or directory"


def test_missing_path_allowed_when_not_required(tmp_path: Path) -> None:
    key = canonicalize(tmp_path / "new" / "file.txt", must_exist=False)

    assert key.name == "file.txt"
    assert key.parent.parent == canonicalize(tmp_path)


@pytest.mark.parametrize("raw", ["", "   ", "bad\x00name"])
def test_malformed_values_raise(raw: str) -> None:
    with pytest.raises(InvalidPathError):
        canonicalize(raw)


def test_non_path_values_raise() -> None:
    with pytest.raises(InvalidPathError):
        canonicalize(42)  # type: ignore[arg-type]


def test_equal_compares_canonical_forms(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    key = canonicalize(tmp_path / "a.txt")

    assert equal("a.txt", key)
    assert equal(str(tmp_path / "a.txt"), "./a.txt")
    assert not equal("a.txt", "b.txt")
    assert not equal("", key)


def test_path_keys_hash_and_order_by_value() -> None:
    first = PathKey("/a/one")
    second = PathKey("/a/two")

    assert {first, PathKey("/a/one")} == {first}
    assert sorted([second, first]) == [first, second]
    assert first != "/a/one"
    assert os.fspath(first) == "/a/one"


def test_relative_to_returns_posix_label() -> None:
    root = PathKey(str(Path("/proj")))
    child = root.joinpath("src", "main.py")

    assert child.relative_to(root) == "src/main.py"
    assert child.name == "main.py"
