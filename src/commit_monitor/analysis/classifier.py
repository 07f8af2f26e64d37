"""Restrict a diff to the files RuboCop knows how to check."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

from commit_monitor.constants import LINTABLE_EXTENSIONS, LINTABLE_FILENAMES
from commit_monitor.git.schemas import DiffDetails


def is_lintable(
    path: str,
    extensions: Iterable[str] = LINTABLE_EXTENSIONS,
    filenames: Iterable[str] = LINTABLE_FILENAMES,
) -> bool:
    """Return True if ``path`` has a lintable extension or basename."""
    name = PurePosixPath(path).name
    return name.endswith(tuple(extensions)) or name in set(filenames)


def filter_lintable(
    diff_details: DiffDetails,
    extensions: Iterable[str] = LINTABLE_EXTENSIONS,
    filenames: Iterable[str] = LINTABLE_FILENAMES,
) -> DiffDetails:
    """Keep only the entries of ``diff_details`` RuboCop can check."""
    exts = tuple(extensions)
    names = frozenset(filenames)
    return {
        path: lines
        for path, lines in diff_details.items()
        if is_lintable(path, exts, names)
    }
