"""Lexical path helpers - no filesystem access."""

from __future__ import annotations

import os
from pathlib import PurePath


def normalize(path: PurePath) -> PurePath:
    """Collapse "." and ".." segments without following symlinks."""
    return type(path)(os.path.normpath(path))


def is_descendant_of(path: PurePath, root: PurePath) -> bool:
    """
    Check whether path equals root or lies beneath it.

    Comparison is per path segment, so "/srv/docs-old" is not inside
    "/srv/docs". Both paths are normalized first.

    Examples:
        >>> from pathlib import PurePosixPath
        >>> is_descendant_of(PurePosixPath("/srv/docs/a.js"), PurePosixPath("/srv/docs"))
        True
        >>> is_descendant_of(PurePosixPath("/srv/docs-old/a.js"), PurePosixPath("/srv/docs"))
        False
        >>> is_descendant_of(PurePosixPath("/srv/docs/../a.js"), PurePosixPath("/srv/docs"))
        False
    """
    path = normalize(path)
    root = normalize(root)
    return path == root or root in path.parents
