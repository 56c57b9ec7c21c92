"""Resolution of `file=` targets to absolute paths with root containment."""

from __future__ import annotations

import logging
from pathlib import Path

from ...errors import ConfigurationError
from ...errors import OutsideRootError
from ...utils.paths import is_descendant_of
from ...utils.paths import normalize
from ...utils.references import ROOT_DIR_TOKEN
from ...utils.references import unescape_path

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves reference targets relative to the referencing document.

    Resolution steps:
    1. A leading ``<rootDir>`` token is replaced with the root directory
    2. Escaped spaces are unescaped
    3. The path is resolved against the document's directory
    4. Unless ``allow_outside`` is set, the result must be the root
       directory or lie beneath it

    Resolution is lexical: symlinks are not followed, so a link inside the
    root that points elsewhere is still considered inside.
    """

    def __init__(self, root_dir: Path | None = None, allow_outside: bool = False):
        """Initialize resolver.

        Args:
            root_dir: Absolute root directory (default: CWD)
            allow_outside: Permit targets outside root_dir

        Raises:
            ConfigurationError: If root_dir is not absolute
        """
        if root_dir is None:
            root_dir = Path.cwd()
        root_dir = Path(root_dir)
        if not root_dir.is_absolute():
            raise ConfigurationError(f'"rootDir" has to be an absolute path, got "{root_dir}"')

        self.root_dir = Path(normalize(root_dir))
        self.allow_outside = allow_outside

    def resolve(self, target_path: str, base_dir: Path) -> Path:
        """Resolve a raw reference target to an absolute path.

        Args:
            target_path: Raw target from the annotation
            base_dir: Directory of the document containing the reference

        Returns:
            Absolute, normalized path

        Raises:
            OutsideRootError: If the path escapes root_dir and outside
                imports are not allowed
        """
        if target_path.startswith(ROOT_DIR_TOKEN):
            target_path = str(self.root_dir) + target_path[len(ROOT_DIR_TOKEN) :]

        absolute_path = Path(normalize(Path(base_dir).absolute() / unescape_path(target_path)))

        if not self.allow_outside and not is_descendant_of(absolute_path, self.root_dir):
            logger.debug(f"Import outside root blocked: {absolute_path} (root: {self.root_dir})")
            raise OutsideRootError(absolute_path, self.root_dir)

        logger.debug(f"Resolved {target_path!r} -> {absolute_path}")
        return absolute_path
