"""Error types raised while importing code into documents.

Every error aborts the whole document transformation; there is no
partial-success mode.
"""

from __future__ import annotations

from pathlib import Path


class CodeImportError(Exception):
    """Base class for all code-import failures."""


class ConfigurationError(CodeImportError):
    """Options are invalid (e.g. a relative root directory)."""


class MalformedReferenceError(CodeImportError):
    """A `file=` annotation does not match the reference grammar."""

    def __init__(self, annotation: str, reason: str | None = None):
        self.annotation = annotation
        self.reason = reason
        message = f"Unable to parse file reference {annotation!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class OutsideRootError(CodeImportError):
    """A reference resolves to a path outside the configured root directory."""

    def __init__(self, path: Path, root_dir: Path):
        self.path = path
        self.root_dir = root_dir
        super().__init__(
            f'Attempted to import code from "{path}", which is outside from the rootDir "{root_dir}"'
        )


class FileAccessError(CodeImportError):
    """Reading a referenced file, or the document itself, failed.

    annotation is None when the document could not be read.
    """

    def __init__(self, path: Path, annotation: str | None, detail: str):
        self.path = path
        self.annotation = annotation
        if annotation is None:
            super().__init__(f'Unable to read "{path}": {detail}')
        else:
            super().__init__(f'Unable to read "{path}" (referenced by {annotation!r}): {detail}')
