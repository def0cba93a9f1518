"""Canonical path identities shared by every lookup in the project layer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import total_ordering
from pathlib import Path

from .errors import InvalidPathError

__all__ = ["PathKey", "canonicalize", "equal"]

LOGGER = logging.getLogger(__name__)


@total_ordering
@dataclass(slots=True, frozen=True, eq=False)
class PathKey:
    """Normalized absolute path used as the identity of files and directories.

    Construct through :func:`canonicalize`; building one directly skips
    normalization and is only meant for values that are already canonical.
    """

    value: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathKey):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PathKey):
            return NotImplemented
        return self.value < other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.value

    def __fspath__(self) -> str:
        return self.value

    @property
    def name(self) -> str:
        return self.as_path().name

    @property
    def parent(self) -> "PathKey":
        return PathKey(str(self.as_path().parent))

    def as_path(self) -> Path:
        return Path(self.value)

    def joinpath(self, *parts: str) -> "PathKey":
        """Return the key of a child entry; ``parts`` must be plain names."""

        return PathKey(str(self.as_path().joinpath(*parts)))

    def relative_to(self, root: "PathKey") -> str:
        return self.as_path().relative_to(root.as_path()).as_posix()


def canonicalize(raw_path: "str | os.PathLike[str] | PathKey", *, must_exist: bool = True) -> PathKey:
    """Resolve ``raw_path`` into a :class:`PathKey`.

    ``~`` is expanded, relative paths are anchored at the current working
    directory, and symlinked components are resolved. With ``must_exist``
    the target has to exist; otherwise the missing tail is normalized
    lexically so a save target can be named before it is written.

    Raises:
        InvalidPathError: The value is empty or malformed, cannot be resolved,
            or does not exist while ``must_exist`` is set.
    """

    if isinstance(raw_path, PathKey):
        raw = raw_path.value
    else:
        try:
            raw = os.fspath(raw_path)
        except TypeError as exc:
            raise InvalidPathError(raw_path=repr(raw_path), reason="not a path") from exc
    if isinstance(raw, bytes) or not raw or not raw.strip():
        raise InvalidPathError(raw_path=str(raw), reason="empty path")
    if "\x00" in raw:
        raise InvalidPathError(raw_path=raw, reason="embedded NUL byte")

    try:
        candidate = Path(raw).expanduser()
        if not candidate.is_absolute():
            candidate = Path.cwd() / candidate
        resolved = candidate.resolve(strict=must_exist)
    except FileNotFoundError as exc:
        raise InvalidPathError(raw_path=raw, reason="no such file or directory") from exc
    except (OSError, RuntimeError) as exc:
        raise InvalidPathError(raw_path=raw, reason=str(exc) or type(exc).__name__) from exc

    key = PathKey(str(resolved))
    LOGGER.debug("canonicalize: %r -> %s", raw, key)
    return key


def equal(a: "str | os.PathLike[str] | PathKey", b: "str | os.PathLike[str] | PathKey") -> bool:
    """Return ``True`` when ``a`` and ``b`` denote the same entry.

    Keys are compared structurally. Raw values are canonicalized first
    without requiring the entries to exist; unresolvable values never match.
    """

    try:
        left = a if isinstance(a, PathKey) else canonicalize(a, must_exist=False)
        right = b if isinstance(b, PathKey) else canonicalize(b, must_exist=False)
    except InvalidPathError:
        return False
    return left == right
