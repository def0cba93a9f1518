"""Tests for :mod:`grove.project.mru`."""

from __future__ import annotations

from grove.core.paths import PathKey
from grove.project.mru import MRUTracker

X = PathKey("/x")
Y = PathKey("/y")
Z = PathKey("/z")


def test_navigation_keeps_last_two_files_on_top() -> None:
    mru = MRUTracker()

    mru.record_access(None, X)
    assert mru.snapshot() == (X,)

    mru.record_access(X, Y)
    assert mru.snapshot() == (Y, X)

    mru.record_access(Y, Z)
    assert mru.snapshot() == (Z, Y, X)

    mru.record_access(Z, X)
    assert mru.snapshot() == (X, Z, Y)


def test_reopening_current_file_is_a_no_op() -> None:
    mru = MRUTracker()
    mru.record_access(None, X)
    mru.record_access(X, Y)

    mru.record_access(Y, Y)

    assert mru.snapshot() == (Y, X)


def test_without_current_file_only_new_path_moves() -> None:
    mru = MRUTracker()
    mru.record_access(None, Y)
    mru.record_access(Y, Z)
    mru.record_access(Z, X)

    mru.record_access(None, Y)

    assert mru.snapshot() == (Y, X, Z)


def test_current_file_not_yet_tracked_is_inserted_second() -> None:
    mru = MRUTracker()

    mru.record_access(X, Y)

    assert mru.snapshot() == (Y, X)
    assert len(mru) == 2


def test_entries_stay_unique() -> None:
    mru = MRUTracker()
    for current, new in [(None, X), (X, Y), (Y, X), (X, Y), (Y, Z), (Z, Y)]:
        mru.record_access(current, new)

    snapshot = mru.snapshot()
    assert len(snapshot) == len(set(snapshot)) == 3
    assert snapshot[:2] == (Y, Z)


def test_forget_and_clear() -> None:
    mru = MRUTracker()
    mru.record_access(X, Y)

    assert mru.forget(X)
    assert not mru.forget(X)
    assert X not in mru
    assert list(mru) == [Y]

    mru.clear()
    assert mru.snapshot() == ()
