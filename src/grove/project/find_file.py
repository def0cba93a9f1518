"""Fuzzy file search over a project tree."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass

from ..core.paths import PathKey
from .mirrors import DirectoryMirror

__all__ = ["FileMatch", "find_files", "fuzzy_score"]

_BOUNDARY_CHARS = "/_-. "


@dataclass(slots=True, frozen=True)
class FileMatch:
    """One find-file hit: the file, its project-relative label, and its score."""

    path: PathKey
    label: str
    score: int


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``candidate`` as a case-insensitive subsequence match of ``query``.

    Returns ``None`` when some query character cannot be matched in order.
    Consecutive runs and matches at word boundaries score higher; gaps and
    long candidates score lower.
    """

    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in _BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def find_files(mirror: DirectoryMirror, query: str, limit: int = 50) -> list[FileMatch]:
    """Return up to ``limit`` project files matching ``query``, best first.

    Labels are paths relative to the project root. Ties are broken by label.
    An empty query lists the first ``limit`` files in walk order.
    """

    if limit <= 0:
        return []
    root = mirror.root_path()
    query = query.strip()

    if not query:
        return [
            FileMatch(path=path, label=path.relative_to(root), score=0)
            for path in itertools.islice(mirror.walk_files(), limit)
        ]

    scored: list[tuple[int, str, PathKey]] = []
    for path in mirror.walk_files():
        label = path.relative_to(root)
        score = fuzzy_score(query, label)
        if score is None:
            continue
        # a hit on the file name itself beats one spread across directories
        name_score = fuzzy_score(query, path.name)
        if name_score is not None:
            score = max(score, name_score + 10)
        scored.append((score, label, path))

    best = heapq.nsmallest(limit, scored, key=lambda item: (-item[0], item[1]))
    return [FileMatch(path=path, label=label, score=score) for score, label, path in best]
