"""
Source tree traversal with include/exclude globs.

Each glob is tried against the base name and against the path relative to
the source root (always with / separators). Exclusion wins over inclusion,
and an excluded directory is not descended into.
"""

import logging
import os
from collections.abc import Iterator
from fnmatch import fnmatchcase
from pathlib import Path

from .config import DEFAULT_INCLUDE

logger = logging.getLogger(__name__)


def matches_any(rel_path: str, patterns: tuple[str, ...] | list[str]) -> bool:
    """Check a relative path (or its base name) against glob patterns."""
    name = rel_path.rsplit("/", 1)[-1]
    return any(fnmatchcase(name, p) or fnmatchcase(rel_path, p) for p in patterns)


def is_excluded_dir(rel_path: str, exclude: tuple[str, ...] | list[str]) -> bool:
    """A directory is excluded by a glob match or by lying under an excluded path."""
    if matches_any(rel_path, exclude):
        return True
    for pattern in exclude:
        prefix = pattern.rstrip("/")
        if prefix and (rel_path == prefix or rel_path.startswith(prefix + "/")):
            return True
    return False


def is_selected(rel_path: str, include: tuple[str, ...] | list[str], exclude: tuple[str, ...] | list[str]) -> bool:
    """Whether a file is processed: included and not excluded."""
    if matches_any(rel_path, exclude):
        return False
    return matches_any(rel_path, include)


def iter_source_files(
    root: Path,
    include: tuple[str, ...] | list[str] = DEFAULT_INCLUDE,
    exclude: tuple[str, ...] | list[str] = (),
) -> Iterator[Path]:
    """Yield selected files below *root* in sorted, depth-first order."""
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        rel_dir = base.relative_to(root).as_posix()
        rel_dir = "" if rel_dir == "." else rel_dir + "/"

        kept = []
        for d in sorted(dirnames):
            if is_excluded_dir(rel_dir + d, exclude):
                logger.debug("excluding directory %s", rel_dir + d)
                continue
            kept.append(d)
        dirnames[:] = kept

        for name in sorted(filenames):
            rel_path = rel_dir + name
            if is_selected(rel_path, include, exclude):
                yield base / name
            elif matches_any(rel_path, include):
                logger.debug("excluding file %s", rel_path)
