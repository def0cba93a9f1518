"""Standardized error types for project operations.

Every failure raised by the project layer derives from :class:`ProjectError`
and carries a machine-readable code so command handlers can report it
without inspecting exception classes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# -----------------------------------------------------------------------------
# Error Code Constants
# -----------------------------------------------------------------------------

class ErrorCode:
    """Constants for error codes used in project error payloads."""

    INVALID_PATH = "invalid_path"
    WRITE_FAILED = "write_failed"
    NO_ACTIVE_TREE = "no_active_tree"
    NO_FOCUSED_DOCUMENT = "no_focused_document"


# -----------------------------------------------------------------------------
# Base Error Class
# -----------------------------------------------------------------------------

@dataclass
class ProjectError(Exception):
    """Base exception class for all project errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for status reporting."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# -----------------------------------------------------------------------------
# Path Errors
# -----------------------------------------------------------------------------

@dataclass
class InvalidPathError(ProjectError):
    """Raised when a raw path cannot be canonicalized."""

    error_code: str = field(default=ErrorCode.INVALID_PATH)
    message: str = field(default="")
    details: dict[str, Any] = field(default_factory=dict)

    raw_path: str = field(default="")
    reason: str = field(default="")

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"Cannot resolve path {self.raw_path!r}"
            if self.reason:
                self.message = f"{self.message}: {self.reason}"
        self.details.setdefault("raw_path", self.raw_path)
        if self.reason:
            self.details.setdefault("reason", self.reason)
        super().__post_init__()


# -----------------------------------------------------------------------------
# Write Errors
# -----------------------------------------------------------------------------

@dataclass
class WriteError(ProjectError):
    """Raised when a mirror fails to commit content to its backing store."""

    error_code: str = field(default=ErrorCode.WRITE_FAILED)
    message: str = field(default="")
    details: dict[str, Any] = field(default_factory=dict)

    path: str = field(default="")
    reason: str = field(default="")

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"Failed to write {self.path}"
            if self.reason:
                self.message = f"{self.message}: {self.reason}"
        self.details.setdefault("path", self.path)
        if self.reason:
            self.details.setdefault("reason", self.reason)
        super().__post_init__()


# -----------------------------------------------------------------------------
# State Errors
# -----------------------------------------------------------------------------

@dataclass
class NoActiveTreeError(ProjectError):
    """Raised when an operation requires a project tree but the window has none."""

    error_code: str = field(default=ErrorCode.NO_ACTIVE_TREE)
    message: str = field(default="No project is open in this window")
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class NoFocusedDocumentError(ProjectError):
    """Raised when a save is requested while no document has focus."""

    error_code: str = field(default=ErrorCode.NO_FOCUSED_DOCUMENT)
    message: str = field(default="No document is focused in this window")
    details: dict[str, Any] = field(default_factory=dict)


__all__ = [
    "ErrorCode",
    "ProjectError",
    "InvalidPathError",
    "WriteError",
    "NoActiveTreeError",
    "NoFocusedDocumentError",
]
