"""Core identity and error types.

This package holds the pieces every other layer depends on: canonical path
keys and the project error hierarchy.
"""

from .errors import (
    ErrorCode,
    InvalidPathError,
    NoActiveTreeError,
    NoFocusedDocumentError,
    ProjectError,
    WriteError,
)
from .paths import PathKey, canonicalize, equal

__all__ = [
    "ErrorCode",
    "InvalidPathError",
    "NoActiveTreeError",
    "NoFocusedDocumentError",
    "PathKey",
    "ProjectError",
    "WriteError",
    "canonicalize",
    "equal",
]
