"""In-memory host used by the command-line launcher and by tests.

These classes implement the :mod:`grove.project.host` protocols without any
GUI toolkit: a window keeps its attached trees and documents in lists, and a
document keeps its buffer as bytes.
"""

from __future__ import annotations

import logging
from typing import Iterator

from .mirrors import Mirror
from .trees import Tree

__all__ = ["HeadlessDocument", "HeadlessWindow"]

LOGGER = logging.getLogger(__name__)


class HeadlessDocument:
    """Editing buffer living in a :class:`HeadlessWindow`."""

    def __init__(self, window: HeadlessWindow) -> None:
        self.window = window
        self.mirror: Mirror | None = None
        self.dirty = False
        self._content = b""

    def __repr__(self) -> str:
        return f"HeadlessDocument({self.title!r})"

    @property
    def title(self) -> str:
        if self.mirror is None:
            return "Untitled"
        return self.mirror.identity().name

    @property
    def text(self) -> str:
        return self._content.decode("utf-8", errors="replace")

    def content(self) -> bytes:
        return self._content

    def replace_content(self, data: bytes) -> None:
        self._content = bytes(data)
        self.dirty = False

    def mark_clean(self) -> None:
        self.dirty = False

    def set_text(self, text: str) -> None:
        """Simulate a user edit."""

        self._content = text.encode("utf-8")
        self.dirty = True

    def focus(self) -> None:
        self.window.focus_document(self)


class HeadlessWindow:
    """Window with a tree surface and a flat list of documents."""

    def __init__(self, name: str = "main") -> None:
        self.name = name
        self.attached_trees: list[Tree] = []
        self._documents: list[HeadlessDocument] = []
        self._focused: HeadlessDocument | None = None

    def __repr__(self) -> str:
        return f"HeadlessWindow({self.name!r})"

    # ------------------------------------------------------------------
    # Tree surface
    # ------------------------------------------------------------------
    def attach_tree(self, tree: Tree) -> None:
        self.attached_trees.append(tree)

    def detach_tree(self, tree: Tree) -> None:
        try:
            self.attached_trees.remove(tree)
        except ValueError:
            LOGGER.debug("HeadlessWindow.detach_tree: %r was not attached", tree)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    def focused_document(self) -> HeadlessDocument | None:
        return self._focused

    def documents(self) -> Iterator[HeadlessDocument]:
        return iter(tuple(self._documents))

    def new_document(self) -> HeadlessDocument:
        document = HeadlessDocument(self)
        self._documents.append(document)
        return document

    def focus_document(self, document: HeadlessDocument) -> None:
        if document not in self._documents:
            raise KeyError(f"{document!r} does not belong to {self!r}")
        self._focused = document

    def close_document(self, document: HeadlessDocument) -> None:
        index = self._documents.index(document)
        self._documents.pop(index)
        if self._focused is document:
            if self._documents:
                self._focused = self._documents[min(index, len(self._documents) - 1)]
            else:
                self._focused = None
