"""Most-recently-used file tracking."""

from __future__ import annotations

import logging
from typing import Iterator

from ..core.paths import PathKey

__all__ = ["MRUTracker"]

LOGGER = logging.getLogger(__name__)


class MRUTracker:
    """Ordered, duplicate-free recency list of file paths.

    The list is kept most recent first. Opening a file moves it to the front
    and moves the file being left to second place, whatever their previous
    ranks were, so the last two files touched are always the top two.
    """

    __slots__ = ("_paths",)

    def __init__(self) -> None:
        self._paths: list[PathKey] = []

    def record_access(self, current_path: PathKey | None, new_path: PathKey) -> None:
        """Record a navigation from ``current_path`` to ``new_path``."""

        if new_path == current_path:
            return

        self._discard(new_path)
        self._paths.insert(0, new_path)

        if current_path is not None:
            self._discard(current_path)
            self._paths.insert(1, current_path)

        LOGGER.debug(
            "MRUTracker.record_access: %s -> %s, total=%d",
            current_path,
            new_path,
            len(self._paths),
        )

    def snapshot(self) -> tuple[PathKey, ...]:
        """Return the list, most recent first."""

        return tuple(self._paths)

    def forget(self, path: PathKey) -> bool:
        """Drop ``path`` from the list, returning whether it was present."""

        return self._discard(path)

    def clear(self) -> None:
        self._paths.clear()

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[PathKey]:
        return iter(tuple(self._paths))

    def _discard(self, path: PathKey) -> bool:
        try:
            self._paths.remove(path)
        except ValueError:
            return False
        return True
