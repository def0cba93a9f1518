"""Tests for the in-memory host window."""

from __future__ import annotations

import pytest

from grove.project.headless import HeadlessWindow


def test_new_documents_are_untitled_and_unfocused() -> None:
    window = HeadlessWindow()

    document = window.new_document()

    assert document.title == "Untitled"
    assert window.focused_document() is None
    assert list(window.documents()) == [document]


def test_edits_mark_dirty_until_clean() -> None:
    document = HeadlessWindow().new_document()

    document.set_text("héllo")
    assert document.dirty
    assert document.content() == "héllo".encode("utf-8")

    document.mark_clean()
    assert not document.dirty
    assert document.text == "héllo"


def test_focus_is_limited_to_own_documents() -> None:
    left, right = HeadlessWindow("left"), HeadlessWindow("right")
    stranger = right.new_document()

    with pytest.raises(KeyError):
        left.focus_document(stranger)


def test_closing_focused_document_focuses_neighbour() -> None:
    window = HeadlessWindow()
    first, second, third = (window.new_document() for _ in range(3))
    second.focus()

    window.close_document(second)
    assert window.focused_document() is third

    window.close_document(third)
    assert window.focused_document() is first

    window.close_document(first)
    assert window.focused_document() is None


def test_detaching_unknown_tree_is_ignored() -> None:
    window = HeadlessWindow()

    window.detach_tree(object())  # type: ignore[arg-type]

    assert window.attached_trees == []
