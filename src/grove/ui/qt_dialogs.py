"""Qt file pickers implementing the project layer's dialog contract."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

__all__ = ["QtDialogProvider"]

LOGGER = logging.getLogger(__name__)


def _file_dialog() -> Any:
    try:  # Local import to avoid mandatory PySide6 dependency at import time.
        from PySide6.QtWidgets import QFileDialog
    except ImportError as exc:  # pragma: no cover - depends on desktop stack
        raise RuntimeError("PySide6 must be installed to show file dialogs.") from exc
    return QFileDialog


class QtDialogProvider:
    """Shows native open/save/directory pickers through ``QFileDialog``.

    Each prompt returns the chosen path, or ``None`` when the user cancels.
    A running ``QApplication`` is required.
    """

    def __init__(self, parent: Any | None = None, *, file_filter: str = "All Files (*)") -> None:
        self._parent = parent
        self._filter = file_filter

    def prompt_open_file(self, start_dir: Path | None = None) -> Path | None:
        dialog = _file_dialog()
        path, _ = dialog.getOpenFileName(self._parent, "Open File", _start(start_dir), self._filter)
        return _result(path)

    def prompt_save_file(self, start_dir: Path | None = None) -> Path | None:
        dialog = _file_dialog()
        path, _ = dialog.getSaveFileName(self._parent, "Save File As", _start(start_dir), self._filter)
        return _result(path)

    def prompt_open_directory(self, start_dir: Path | None = None) -> Path | None:
        dialog = _file_dialog()
        path = dialog.getExistingDirectory(self._parent, "Open Directory", _start(start_dir))
        return _result(path)


def _start(start_dir: Path | None) -> str:
    return str(start_dir) if start_dir is not None else ""


def _result(path: str) -> Path | None:
    if not path:
        LOGGER.debug("QtDialogProvider: dialog cancelled")
        return None
    return Path(path)
