"""Contracts the project layer expects from its host application.

The host owns windows, tab rendering, file pickers, and persistent storage.
The project layer only talks to it through these protocols, so it can run
against a real GUI, the headless host in :mod:`grove.project.headless`, or
test stubs alike.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Protocol

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from .mirrors import Mirror
    from .trees import Tree

__all__ = [
    "DialogProvider",
    "DocumentHandle",
    "KeyValueStorage",
    "TreeSurface",
    "Window",
]


class DocumentHandle(Protocol):
    """An open editing surface holding a buffer and at most one mirror."""

    mirror: Mirror | None

    def content(self) -> bytes:
        """Return the buffer contents as they would be written to disk."""
        ...

    def replace_content(self, data: bytes) -> None:
        """Load ``data`` into the buffer, marking it clean."""
        ...

    def mark_clean(self) -> None:
        """Record that the buffer matches what was last written."""
        ...

    def focus(self) -> None:
        """Bring the document to the front of its window."""
        ...


class TreeSurface(Protocol):
    """The part of a window that renders project trees."""

    def attach_tree(self, tree: Tree) -> None:
        ...

    def detach_tree(self, tree: Tree) -> None:
        ...


class Window(TreeSurface, Protocol):
    """An editor window: a tree surface plus a set of open documents."""

    def focused_document(self) -> DocumentHandle | None:
        ...

    def documents(self) -> Iterable[DocumentHandle]:
        ...

    def new_document(self) -> DocumentHandle:
        """Create an empty, unfocused document in this window."""
        ...


class DialogProvider(Protocol):
    """Protocol for modal file pickers; each returns ``None`` when cancelled."""

    def prompt_open_file(self, start_dir: Path | None = None) -> Path | str | None:
        ...

    def prompt_save_file(self, start_dir: Path | None = None) -> Path | str | None:
        ...

    def prompt_open_directory(self, start_dir: Path | None = None) -> Path | str | None:
        ...


class KeyValueStorage(Protocol):
    """Minimal persistent string store used for cross-session memory."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def __getitem__(self, key: str) -> Any:
        ...

    def __setitem__(self, key: str, value: Any) -> None:
        ...
