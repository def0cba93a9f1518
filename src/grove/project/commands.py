"""Project command set exposed through menus, toolbars, and key bindings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .host import Window

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from .facade import ProjectFacade

__all__ = ["ProjectAction", "build_project_actions"]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ProjectAction:
    """A high-level project command with its default shortcut.

    Actions with ``requires_project`` are only enabled while some window has
    a project open.
    """

    name: str
    text: str
    shortcut: str | None = None
    status_tip: str | None = None
    callback: Callable[[], Any] | None = None
    requires_project: bool = False
    availability: Callable[[], bool] | None = None

    def enabled(self) -> bool:
        if not self.requires_project or self.availability is None:
            return True
        return bool(self.availability())

    def trigger(self) -> Any:
        """Invoke the registered callback when enabled."""

        if self.callback is None:
            return None
        if not self.enabled():
            LOGGER.debug("ProjectAction %s ignored: no project open", self.name)
            return None
        return self.callback()


def build_project_actions(
    facade: ProjectFacade,
    window_provider: Callable[[], Window],
    *,
    query_provider: Callable[[], str | None] | None = None,
) -> dict[str, ProjectAction]:
    """Return the project actions keyed by name, bound to ``facade``.

    ``window_provider`` returns the window a command applies to at the moment
    it fires. ``query_provider`` supplies the find-file query; a ``None``
    query cancels the search.
    """

    def _find_file() -> Any:
        if query_provider is None:
            return None
        query = query_provider()
        if query is None:
            return None
        return facade.find_file(window_provider(), query)

    availability = facade.has_open_project
    actions = [
        ProjectAction(
            name="file_open",
            text="&Open File...",
            shortcut="Ctrl+O",
            status_tip="Open a file from disk",
            callback=lambda: facade.open_file(window_provider()),
        ),
        ProjectAction(
            name="file_save",
            text="&Save",
            shortcut="Ctrl+S",
            status_tip="Save the current document",
            callback=lambda: facade.save(window_provider()),
        ),
        ProjectAction(
            name="file_save_as",
            text="Save &As...",
            shortcut="Ctrl+Shift+S",
            status_tip="Save the current document to a new file",
            callback=lambda: facade.save_as(window_provider()),
        ),
        ProjectAction(
            name="directory_open",
            text="Open &Directory...",
            shortcut="Ctrl+Shift+O",
            status_tip="Open a directory as the project tree",
            callback=lambda: facade.open_directory(window_provider()),
        ),
        ProjectAction(
            name="directory_close",
            text="&Close Directory",
            status_tip="Close the project tree",
            callback=lambda: facade.close_tree(window_provider()),
            requires_project=True,
            availability=availability,
        ),
        ProjectAction(
            name="directory_refresh",
            text="&Refresh Directory",
            status_tip="Re-read the project tree from disk",
            callback=lambda: facade.refresh_tree(window_provider()),
            requires_project=True,
            availability=availability,
        ),
        ProjectAction(
            name="find_file",
            text="&Find File...",
            shortcut="Ctrl+T",
            status_tip="Find a file in the project",
            callback=_find_file,
            requires_project=True,
            availability=availability,
        ),
    ]
    return {action.name: action for action in actions}
