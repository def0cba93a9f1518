"""Project tree management: mirrors, window trees, recency, and the facade.

Components:
    - PathKey / canonicalize: path identity (see :mod:`grove.core.paths`)
    - DirectoryMirror / FileMirror: backing-store adapters
    - MRUTracker: most-recently-used file list
    - DocumentIdentityResolver: finds documents already bound to a file
    - TreeAssociationManager: one project tree per window
    - ProjectFacade: the operations command handlers call
"""

from __future__ import annotations

from .commands import ProjectAction, build_project_actions
from .facade import LAST_DIR_KEY, ProjectFacade
from .find_file import FileMatch, find_files
from .headless import HeadlessDocument, HeadlessWindow
from .mirrors import DirectoryMirror, Entry, FileMirror, Mirror, MirrorKind
from .mru import MRUTracker
from .resolver import DocumentIdentityResolver, iter_open_documents
from .trees import ProjectSensitivity, Tree, TreeAssociationManager

__all__: list[str] = [
    "DirectoryMirror",
    "DocumentIdentityResolver",
    "Entry",
    "FileMatch",
    "FileMirror",
    "HeadlessDocument",
    "HeadlessWindow",
    "LAST_DIR_KEY",
    "MRUTracker",
    "Mirror",
    "MirrorKind",
    "ProjectAction",
    "ProjectFacade",
    "ProjectSensitivity",
    "Tree",
    "TreeAssociationManager",
    "build_project_actions",
    "find_files",
    "iter_open_documents",
]
