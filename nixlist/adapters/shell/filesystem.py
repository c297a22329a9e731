"""
Filesystem adapter — read-only traversal of store paths.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from nixlist.core.errors import ArtifactMissing, TraversalError

logger = logging.getLogger(__name__)


def walk_tree(root: Path) -> Iterator[Path]:
    """Lazily yield ``root`` and every path beneath it.

    The existence check happens immediately; the walk itself only runs
    as the iterator is consumed.  Files, directories and symlinks are
    all yielded; symlinked directories are reported but not followed.
    Order is whatever the filesystem returns.

    Raises:
        ArtifactMissing: If ``root`` does not exist (raised on call).
        TraversalError: If a directory cannot be read (raised mid-iteration,
            after the paths already yielded).
    """
    if not os.path.lexists(root):
        raise ArtifactMissing(f"Store path does not exist: {root}")
    logger.debug("Walking %s", root)
    return _walk(root)


def _walk(root: Path) -> Iterator[Path]:
    yield root
    if root.is_symlink() or not root.is_dir():
        return

    def _raise(err: OSError) -> None:
        raise TraversalError(f"Cannot read {err.filename}: {err.strerror}") from err

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        base = Path(dirpath)
        for name in dirnames:
            yield base / name
        for name in filenames:
            yield base / name
