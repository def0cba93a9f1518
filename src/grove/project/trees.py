"""Window to project-tree association.

Every window shows at most one project tree. :class:`TreeAssociationManager`
owns that mapping, keeps the window's tree surface in step with it, and
maintains the ``open_project`` availability signal used to enable
project-scoped commands.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

from ..core.errors import NoActiveTreeError
from ..events import EventBus, ProjectClosed, ProjectOpened, ProjectRefreshed, SensitivityChanged
from .host import TreeSurface
from .mirrors import DirectoryMirror, Entry, MirrorKind

__all__ = ["ProjectSensitivity", "Tree", "TreeAssociationManager"]

LOGGER = logging.getLogger(__name__)

SensitivityListener = Callable[[bool], None]


class Tree:
    """A project tree: a directory mirror plus the host's rendering controller.

    ``entries`` holds the top-level listing as of the last :meth:`refresh`;
    the mirror itself never caches.
    """

    __slots__ = ("mirror", "controller", "entries")

    def __init__(self, mirror: DirectoryMirror, controller: Any | None = None) -> None:
        self.mirror = mirror
        self.controller = controller
        self.entries: tuple[Entry, ...] = ()

    def __repr__(self) -> str:
        return f"Tree({self.mirror.root_path()})"

    @property
    def is_project(self) -> bool:
        return self.mirror.kind is MirrorKind.DIRECTORY

    def refresh(self) -> tuple[Entry, ...]:
        """Re-query the mirror and hand the new listing to the controller."""

        self.entries = tuple(self.mirror.list_children())
        reload = getattr(self.controller, "reload", None)
        if callable(reload):
            reload(self)
        return self.entries


class ProjectSensitivity:
    """Derived ``open_project`` flag: true while any window has a project tree."""

    __slots__ = ("name", "_probe", "_active", "_listeners", "_bus")

    def __init__(
        self,
        probe: Callable[[], bool],
        event_bus: EventBus | None = None,
        *,
        name: str = "open_project",
    ) -> None:
        self.name = name
        self._probe = probe
        self._active = False
        self._listeners: list[SensitivityListener] = []
        self._bus = event_bus

    @property
    def active(self) -> bool:
        return self._active

    def add_listener(self, listener: SensitivityListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SensitivityListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def recompute(self) -> bool:
        """Re-evaluate the probe, notifying listeners when the value flips.

        A listener that raises is logged and the rest still run.
        """

        value = bool(self._probe())
        if value == self._active:
            return value
        self._active = value
        LOGGER.debug("ProjectSensitivity: %s -> %s", self.name, value)
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                LOGGER.exception("ProjectSensitivity: listener %r failed for %s", listener, self.name)
        if self._bus is not None:
            self._bus.publish(SensitivityChanged(name=self.name, active=value))
        return value


class TreeAssociationManager:
    """Maps each window to at most one project :class:`Tree`.

    A window is either without a project or showing exactly one tree.
    Replacing a tree attaches the new one before detaching the old, so the
    window's tree surface is never empty in between.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self._window_trees: dict[TreeSurface, Tree] = {}
        self._bus = event_bus
        self.sensitivity = ProjectSensitivity(self._any_project_open, event_bus)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open_tree(self, window: TreeSurface, tree: Tree) -> None:
        old_tree = self._window_trees.get(window)
        if old_tree is tree:
            LOGGER.debug("TreeAssociationManager.open_tree: %r already attached", tree)
            return

        window.attach_tree(tree)
        self._window_trees[window] = tree
        if old_tree is not None:
            window.detach_tree(old_tree)

        LOGGER.debug(
            "TreeAssociationManager.open_tree: %r (replaced=%r)",
            tree,
            old_tree,
        )
        self.sensitivity.recompute()
        self._publish(
            ProjectOpened(
                root=str(tree.mirror.root_path()),
                replaced=str(old_tree.mirror.root_path()) if old_tree is not None else None,
            )
        )

    def close_tree(self, window: TreeSurface) -> Tree | None:
        """Detach and forget the window's tree; a window without one is left alone."""

        tree = self._window_trees.pop(window, None)
        if tree is None:
            LOGGER.debug("TreeAssociationManager.close_tree: no tree attached")
            return None

        window.detach_tree(tree)
        LOGGER.debug("TreeAssociationManager.close_tree: %r", tree)
        self.sensitivity.recompute()
        self._publish(ProjectClosed(root=str(tree.mirror.root_path())))
        return tree

    def refresh_tree(self, window: TreeSurface) -> bool:
        """Re-list the window's tree, returning ``False`` when it has none."""

        tree = self._window_trees.get(window)
        if tree is None:
            return False

        entries = tree.refresh()
        LOGGER.debug("TreeAssociationManager.refresh_tree: %r, entries=%d", tree, len(entries))
        self._publish(ProjectRefreshed(root=str(tree.mirror.root_path()), entry_count=len(entries)))
        return True

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def tree_for(self, window: TreeSurface) -> Tree | None:
        return self._window_trees.get(window)

    def require_tree(self, window: TreeSurface) -> Tree:
        tree = self._window_trees.get(window)
        if tree is None:
            raise NoActiveTreeError()
        return tree

    def windows(self) -> Iterator[TreeSurface]:
        return iter(tuple(self._window_trees))

    def has_open_project(self) -> bool:
        return self._any_project_open()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _any_project_open(self) -> bool:
        return any(tree.is_project for tree in self._window_trees.values())

    def _publish(self, event: Any) -> None:
        if self._bus is not None:
            self._bus.publish(event)
