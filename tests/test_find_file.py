"""Tests for :mod:`grove.project.find_file`."""

from __future__ import annotations

from pathlib import Path

import pytest

from grove.core.paths import canonicalize
from grove.project.find_file import find_files, fuzzy_score
from grove.project.mirrors import DirectoryMirror


@pytest.fixture
def mirror(project_dir: Path) -> DirectoryMirror:
    (project_dir / "src" / "maintenance_notes.txt").write_text("", encoding="utf-8")
    (project_dir / "docs").mkdir()
    (project_dir / "docs" / "guide.md").write_text("", encoding="utf-8")
    return DirectoryMirror(canonicalize(project_dir))


def test_fuzzy_score_requires_ordered_subsequence() -> None:
    assert fuzzy_score("mn", "main.py") is not None
    assert fuzzy_score("nm", "main.py") is None
    assert fuzzy_score("", "anything") == 0


def test_fuzzy_score_prefers_boundaries_and_runs() -> None:
    boundary = fuzzy_score("gd", "guide_doc.md")
    scattered = fuzzy_score("gd", "xgxxxxd.md")

    assert boundary is not None and scattered is not None
    assert boundary > scattered
    assert fuzzy_score("MAIN", "main.py") == fuzzy_score("main", "main.py")


def test_find_files_ranks_file_name_hits_first(mirror: DirectoryMirror) -> None:
    matches = find_files(mirror, "main")

    assert [match.label for match in matches] == ["src/main.py", "src/maintenance_notes.txt"]
    assert matches[0].score >= matches[1].score


def test_find_files_respects_limit(mirror: DirectoryMirror) -> None:
    assert len(find_files(mirror, "main", limit=1)) == 1
    assert find_files(mirror, "main", limit=0) == []


def test_empty_query_lists_files_in_walk_order(mirror: DirectoryMirror) -> None:
    labels = [match.label for match in find_files(mirror, "  ")]

    assert labels == ["README.md", "docs/guide.md", "src/main.py", "src/maintenance_notes.txt"]


def test_hidden_and_ignored_files_are_not_searched(mirror: DirectoryMirror) -> None:
    assert find_files(mirror, "config") == []
    assert find_files(mirror, "hidden") == []


def test_ties_break_by_label(tmp_path: Path) -> None:
    for name in ("b", "a"):
        (tmp_path / name).mkdir()
        (tmp_path / name / "same.txt").write_text("", encoding="utf-8")
    mirror = DirectoryMirror(canonicalize(tmp_path))

    assert [match.label for match in find_files(mirror, "same")] == ["a/same.txt", "b/same.txt"]
