"""Cross-window lookup of documents already bound to a file."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from ..core.paths import PathKey
from .host import DocumentHandle, Window

__all__ = ["DocumentIdentityResolver", "iter_open_documents"]

LOGGER = logging.getLogger(__name__)


def iter_open_documents(
    windows: Iterable[Window],
) -> Iterator[tuple[DocumentHandle, PathKey | None]]:
    """Yield every open document across ``windows`` with its file identity.

    Documents without a mirror, or whose mirror cannot commit (anything that
    is not a file), are yielded with ``None``.
    """

    for window in windows:
        for document in window.documents():
            mirror = document.mirror
            if mirror is None or not mirror.has_commit_capability:
                yield document, None
            else:
                yield document, mirror.identity()


class DocumentIdentityResolver:
    """Finds the editing surface already bound to a canonical path.

    Nothing is cached: tabs can be opened, closed, or rebound between calls,
    so every lookup walks the sequence it is handed.
    """

    __slots__ = ()

    def find_open(
        self,
        canonical_path: PathKey,
        all_open_documents: Iterable[tuple[DocumentHandle, PathKey | None]],
    ) -> DocumentHandle | None:
        """Return the first document whose file path equals ``canonical_path``."""

        for document, document_path in all_open_documents:
            if document_path is not None and document_path == canonical_path:
                LOGGER.debug("DocumentIdentityResolver: %s already open", canonical_path)
                return document
        return None

    def find_open_in(self, canonical_path: PathKey, windows: Iterable[Window]) -> DocumentHandle | None:
        """Resolve ``canonical_path`` against the live documents of ``windows``."""

        return self.find_open(canonical_path, iter_open_documents(windows))
