"""Project operations used by command handlers.

:class:`ProjectFacade` is the single long-lived coordinator a host creates at
start-up and hands to its command handlers. It owns the window→tree map, the
MRU list, and the open-document resolver, and composes them into the
user-facing operations: open a path, file, or directory; save and save-as;
close and refresh the tree; find a file in the project.

Windows and documents are always passed in explicitly; the facade never asks
the host which window or document currently has focus.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator

from ..core.errors import InvalidPathError, NoFocusedDocumentError
from ..core.paths import PathKey, canonicalize
from ..events import DocumentOpened, DocumentSaved, EventBus
from ..services.settings import Settings
from .find_file import FileMatch, find_files
from .host import DialogProvider, DocumentHandle, KeyValueStorage, Window
from .mirrors import DEFAULT_IGNORED_NAMES, DirectoryMirror, FileMirror
from .mru import MRUTracker
from .resolver import DocumentIdentityResolver
from .trees import Tree, TreeAssociationManager

__all__ = ["LAST_DIR_KEY", "ProjectFacade"]

LOGGER = logging.getLogger(__name__)

LAST_DIR_KEY = "last_dir"


class ProjectFacade:
    """Coordinator behind the open/save/close/refresh/find-file commands.

    Events Emitted:
        - DocumentOpened: After a file is opened or an open tab is focused
        - DocumentSaved: After a save or save-as commits
        - ProjectOpened / ProjectClosed / ProjectRefreshed / SensitivityChanged:
          through the tree manager
    """

    def __init__(
        self,
        windows: Callable[[], Iterable[Window]] | None = None,
        *,
        storage: KeyValueStorage | None = None,
        dialogs: DialogProvider | None = None,
        event_bus: EventBus | None = None,
        settings: Settings | None = None,
        trees: TreeAssociationManager | None = None,
        mru: MRUTracker | None = None,
        resolver: DocumentIdentityResolver | None = None,
        controller_factory: Callable[[], Any] | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            windows: Returns every open window; used to find documents that
                are already open anywhere.
            storage: Key-value store remembering the last used directory.
            dialogs: File pickers used when an operation gets no path.
            event_bus: Bus receiving project and document events.
            settings: Listing and find-file configuration.
            trees: Window→tree manager, created when omitted.
            mru: Recency tracker, created when omitted.
            resolver: Open-document resolver, created when omitted.
            controller_factory: Builds the host's rendering controller for
                each new tree.
        """
        self._windows = windows or (lambda: ())
        self._storage: KeyValueStorage = storage if storage is not None else {}  # type: ignore[assignment]
        self._dialogs = dialogs
        self._bus = event_bus
        self.settings = settings or Settings()
        self.trees = trees or TreeAssociationManager(event_bus)
        self.mru = mru or MRUTracker()
        self.resolver = resolver or DocumentIdentityResolver()
        self._controller_factory = controller_factory

    # ------------------------------------------------------------------
    # Start-up
    # ------------------------------------------------------------------
    def start(self, window: Window, paths: Iterable[str | os.PathLike[str]]) -> None:
        """Open command-line arguments: directories as trees, files as documents."""

        for raw in paths:
            try:
                key = canonicalize(raw)
            except InvalidPathError as exc:
                LOGGER.warning("Skipping start-up path %s: %s", raw, exc.message)
                continue
            if os.path.isdir(key.value):
                self.open_directory(window, key)
            elif os.path.isfile(key.value):
                self.open_file(window, key)
            else:
                LOGGER.warning("Skipping start-up path %s: not a file or directory", raw)

    def filter_path(self) -> Path:
        """Directory file pickers start in: the last one used, else the cwd."""

        last_dir = self._storage.get(LAST_DIR_KEY)
        if isinstance(last_dir, str) and os.path.isdir(last_dir):
            return Path(last_dir)
        return Path(os.path.abspath(os.getcwd()))

    # ------------------------------------------------------------------
    # Opening
    # ------------------------------------------------------------------
    def open_path(self, window: Window, raw_path: str | os.PathLike[str]) -> Tree | DocumentHandle:
        """Open ``raw_path`` as a project tree or a document, whichever it is."""

        key = canonicalize(raw_path)
        if os.path.isdir(key.value):
            return self._open_tree_at(window, key)
        return self._open_file_at(window, key)

    def open_file(self, window: Window, raw_path: str | os.PathLike[str] | None = None) -> DocumentHandle | None:
        """Open a file in ``window``, focusing its existing tab if it is open anywhere.

        Prompts for the file when ``raw_path`` is ``None``; returns ``None``
        when the prompt is cancelled.
        """

        if raw_path is None:
            raw_path = self._prompt("prompt_open_file")
            if raw_path is None:
                return None

        key = canonicalize(raw_path)
        if os.path.isdir(key.value):
            raise InvalidPathError(raw_path=str(raw_path), reason="is a directory")
        return self._open_file_at(window, key)

    def open_directory(self, window: Window, raw_path: str | os.PathLike[str] | None = None) -> Tree | None:
        """Open a directory as the window's project tree, replacing any current one."""

        if raw_path is None:
            raw_path = self._prompt("prompt_open_directory")
            if raw_path is None:
                return None

        key = canonicalize(raw_path)
        if not os.path.isdir(key.value):
            raise InvalidPathError(raw_path=str(raw_path), reason="not a directory")
        return self._open_tree_at(window, key)

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------
    def save(self, window: Window) -> PathKey | None:
        """Commit the focused document to its file, or save-as when it has none."""

        document = self._require_focused(window)
        mirror = document.mirror
        if mirror is None or not mirror.has_commit_capability:
            return self.save_as(window)

        mirror.commit(document.content())
        document.mark_clean()
        path = mirror.identity()
        LOGGER.debug("ProjectFacade.save: %s", path)
        self._publish(DocumentSaved(path=str(path)))
        return path

    def save_as(self, window: Window, raw_path: str | os.PathLike[str] | None = None) -> PathKey | None:
        """Write the focused document to a new file and rebind it there.

        If the write fails the document keeps its previous mirror and the
        :class:`WriteError` propagates.
        """

        document = self._require_focused(window)
        if raw_path is None:
            raw_path = self._prompt("prompt_save_file")
            if raw_path is None:
                return None

        key = canonicalize(raw_path, must_exist=False)
        new_mirror = FileMirror(key)
        new_mirror.commit(document.content())

        previous = document.mirror
        document.mirror = new_mirror
        document.mark_clean()
        self.refresh_tree(window)

        previous_path = previous.identity() if previous is not None else None
        LOGGER.debug("ProjectFacade.save_as: %s (previous=%s)", key, previous_path)
        self._publish(
            DocumentSaved(
                path=str(key),
                previous_path=str(previous_path) if previous_path is not None else None,
            )
        )
        return key

    # ------------------------------------------------------------------
    # Tree commands
    # ------------------------------------------------------------------
    def close_tree(self, window: Window) -> Tree | None:
        return self.trees.close_tree(window)

    def refresh_tree(self, window: Window) -> bool:
        return self.trees.refresh_tree(window)

    def find_file(self, window: Window, query: str, limit: int | None = None) -> list[FileMatch]:
        """Fuzzy-search the files of the window's project.

        Raises:
            NoActiveTreeError: The window has no project open.
        """

        tree = self.trees.require_tree(window)
        return find_files(tree.mirror, query, limit if limit is not None else self.settings.find_file_limit)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def recent_files(self) -> tuple[PathKey, ...]:
        return self.mru.snapshot()

    def has_open_project(self) -> bool:
        return self.trees.has_open_project()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _open_file_at(self, window: Window, key: PathKey) -> DocumentHandle:
        existing = self.resolver.find_open_in(key, self._all_windows(window))
        data: bytes | None = None
        if existing is None:
            mirror = FileMirror(key)
            try:
                data = mirror.read()
            except OSError as exc:
                raise InvalidPathError(raw_path=str(key), reason=exc.strerror or str(exc)) from exc

        self.mru.record_access(_document_path(window.focused_document()), key)

        if existing is not None:
            existing.focus()
            LOGGER.debug("ProjectFacade.open_file: focused existing document for %s", key)
            self._publish(DocumentOpened(path=str(key), reused=True))
            return existing

        document = window.new_document()
        document.mirror = mirror
        document.replace_content(data or b"")
        document.focus()
        LOGGER.debug("ProjectFacade.open_file: opened %s", key)
        self._publish(DocumentOpened(path=str(key)))
        return document

    def _open_tree_at(self, window: Window, key: PathKey) -> Tree:
        ignored = self.settings.ignored_names
        mirror = DirectoryMirror(
            key,
            show_hidden=self.settings.show_hidden_files,
            ignored_names=DEFAULT_IGNORED_NAMES if ignored is None else ignored,
        )
        controller = self._controller_factory() if self._controller_factory is not None else None
        tree = Tree(mirror, controller)
        tree.refresh()
        self.trees.open_tree(window, tree)
        return tree

    def _prompt(self, method: str) -> str | os.PathLike[str] | None:
        if self._dialogs is None:
            LOGGER.warning("ProjectFacade: no dialog provider for %s", method)
            return None
        raw = getattr(self._dialogs, method)(self.filter_path())
        if raw is None:
            LOGGER.debug("ProjectFacade: %s cancelled", method)
            return None
        self._storage[LAST_DIR_KEY] = os.path.dirname(os.path.abspath(os.path.expanduser(os.fspath(raw))))
        return raw

    def _all_windows(self, window: Window) -> Iterator[Window]:
        seen_current = False
        for candidate in self._windows():
            if candidate is window:
                seen_current = True
            yield candidate
        if not seen_current:
            yield window

    def _require_focused(self, window: Window) -> DocumentHandle:
        document = window.focused_document()
        if document is None:
            raise NoFocusedDocumentError()
        return document

    def _publish(self, event: Any) -> None:
        if self._bus is not None:
            self._bus.publish(event)


def _document_path(document: DocumentHandle | None) -> PathKey | None:
    if document is None:
        return None
    mirror = document.mirror
    if mirror is None or not mirror.has_commit_capability:
        return None
    return mirror.identity()
