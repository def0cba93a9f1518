"""Mirrors binding trees and documents to their backing store.

A mirror is the only thing that touches the file system on behalf of a tree
or a document. The variants are closed: :class:`DirectoryMirror` backs a
project tree and can only be listed, :class:`FileMirror` backs a single
document and can be read and committed. Callers branch on
:attr:`Mirror.kind` or :attr:`Mirror.has_commit_capability`, never on the
concrete class.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from ..core.errors import InvalidPathError, WriteError
from ..core.paths import PathKey, canonicalize
from ..utils import file_io

__all__ = [
    "DEFAULT_IGNORED_NAMES",
    "DirectoryMirror",
    "Entry",
    "FileMirror",
    "Listing",
    "Mirror",
    "MirrorKind",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_IGNORED_NAMES: tuple[str, ...] = (".git", ".hg", ".svn", "__pycache__", "node_modules")


class MirrorKind(Enum):
    """Closed set of mirror variants."""

    DIRECTORY = "directory"
    FILE = "file"


class Mirror(ABC):
    """Common surface of every mirror variant."""

    __slots__ = ()

    kind: MirrorKind

    @property
    def has_commit_capability(self) -> bool:
        return self.kind is MirrorKind.FILE

    @abstractmethod
    def identity(self) -> PathKey:
        """Return the path this mirror is bound to."""


@dataclass(slots=True, frozen=True)
class Entry:
    """One child row of a directory listing."""

    path: PathKey
    name: str
    is_dir: bool


class Listing:
    """Lazy, restartable view over a directory's children.

    Nothing is read until iteration starts, and every new iteration scans the
    directory again so the result always reflects the current disk state.
    """

    __slots__ = ("_mirror",)

    def __init__(self, mirror: DirectoryMirror) -> None:
        self._mirror = mirror

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._mirror._scan(self._mirror.root_path()))

    def __repr__(self) -> str:
        return f"Listing({self._mirror.root_path()})"


class DirectoryMirror(Mirror):
    """Mirror backing a project tree rooted at a directory."""

    __slots__ = ("_root", "_show_hidden", "_ignored_names")

    kind = MirrorKind.DIRECTORY

    def __init__(
        self,
        root: PathKey,
        *,
        show_hidden: bool = False,
        ignored_names: Iterable[str] = DEFAULT_IGNORED_NAMES,
    ) -> None:
        self._root = root
        self._show_hidden = show_hidden
        self._ignored_names = frozenset(ignored_names)

    def __repr__(self) -> str:
        return f"DirectoryMirror({self._root})"

    def identity(self) -> PathKey:
        return self._root

    def root_path(self) -> PathKey:
        return self._root

    def list_children(self, directory: PathKey | None = None) -> Iterable[Entry]:
        """Return the children of the root, or of ``directory`` below it.

        The root listing is a lazy :class:`Listing`; listing a nested
        directory (tree expansion) scans it immediately.
        """

        if directory is None or directory == self._root:
            return Listing(self)
        return self._scan(directory)

    def walk_files(self) -> Iterator[PathKey]:
        """Yield every visible file below the root, depth first in name order.

        Symlinked directories are followed once; a directory whose resolved
        target was already walked is skipped, so link cycles terminate.
        """

        visited: set[PathKey] = set()
        pending = [self._root]
        while pending:
            current = pending.pop()
            try:
                target = canonicalize(current)
            except InvalidPathError:
                continue
            if target in visited:
                LOGGER.debug("DirectoryMirror.walk_files: %s already walked as %s", current, target)
                continue
            visited.add(target)
            children = self._scan(current)
            subdirs: list[PathKey] = []
            for entry in children:
                if entry.is_dir:
                    subdirs.append(entry.path)
                else:
                    yield entry.path
            pending.extend(reversed(subdirs))

    def _visible(self, name: str) -> bool:
        if not self._show_hidden and name.startswith("."):
            return False
        return name not in self._ignored_names

    def _scan(self, directory: PathKey) -> list[Entry]:
        children: list[Entry] = []
        try:
            with os.scandir(directory.value) as entries:
                for child in entries:
                    if not self._visible(child.name):
                        continue
                    try:
                        is_dir = child.is_dir()
                    except OSError:
                        is_dir = False
                    children.append(
                        Entry(path=directory.joinpath(child.name), name=child.name, is_dir=is_dir)
                    )
        except OSError as exc:
            LOGGER.debug("DirectoryMirror: cannot list %s: %s", directory, exc)
            return []

        children.sort(key=lambda item: (not item.is_dir, item.name.lower()))
        return children


class FileMirror(Mirror):
    """Mirror backing one document with one file.

    The mirror's path is fixed for its whole life; save-as is expressed by
    replacing the document's mirror rather than re-pointing this one.
    """

    __slots__ = ("_path",)

    kind = MirrorKind.FILE

    def __init__(self, path: PathKey) -> None:
        self._path = path

    def __repr__(self) -> str:
        return f"FileMirror({self._path})"

    def identity(self) -> PathKey:
        return self._path

    def path(self) -> PathKey:
        return self._path

    def exists(self) -> bool:
        return os.path.isfile(self._path.value)

    def read(self) -> bytes:
        return self._path.as_path().read_bytes()

    def commit(self, content: bytes) -> None:
        """Write ``content`` to the file atomically.

        Raises:
            WriteError: The content could not be written; the file on disk
                and this mirror are left as they were.
        """

        try:
            file_io.write_bytes(self._path.as_path(), content, atomic=True)
        except OSError as exc:
            LOGGER.warning("FileMirror.commit failed for %s: %s", self._path, exc)
            raise WriteError(path=str(self._path), reason=exc.strerror or str(exc)) from exc
        LOGGER.debug("FileMirror.commit: %s (%d bytes)", self._path, len(content))

