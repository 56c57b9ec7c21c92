"""Pure text processing for `file=` annotations - no file I/O.

Annotation grammar (case-sensitive)::

    reference := "file=" path ( "#" lineSpec )?
    lineSpec  := "L" DIGITS ( "-" ( "L" DIGITS )? )?

A literal space in the path is written as ``\\ `` so that it survives the
split of the code-block metadata into tokens.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from re import Pattern

from ..errors import MalformedReferenceError

FILE_PREFIX = "file="

# Placeholder substituted with the configured root directory
ROOT_DIR_TOKEN = "<rootDir>"

# Space not preceded by a backslash
META_SEPARATOR: Pattern = re.compile(r"(?<!\\) ")

ESCAPED_SPACE: Pattern = re.compile(r"\\ ")

# Non-greedy path: stops at the first "#" that begins a complete line spec
REFERENCE_PATTERN: Pattern = re.compile(
    r"^file=(?P<path>.+?)(?:#L(?P<from>\d+)(?:(?P<dash>-)(?:L(?P<to>\d+))?)?)?$"
)

# Tail of the last path segment that looks like a line spec ("#L3x", "#L2-L", "#-L4")
LINE_SPEC_ATTEMPT: Pattern = re.compile(r"#(?P<lead>-?)L(?:\d|$)[^#/]*$")


@dataclass(frozen=True)
class WholeFile:
    """No line spec: the entire file."""


@dataclass(frozen=True)
class SingleLine:
    """``#L<n>``: exactly one line."""

    line: int


@dataclass(frozen=True)
class LineRange:
    """``#L<n>-`` (open-ended, ``end is None``) or ``#L<n>-L<m>``."""

    start: int
    end: int | None = None


LineSelection = WholeFile | SingleLine | LineRange


@dataclass(frozen=True)
class ParsedReference:
    """A parsed `file=` annotation.

    Attributes:
        annotation: The annotation text as written in the document
        target_path: Raw path, still containing escaped spaces and any
            root-dir placeholder
        selection: Which lines of the target to import
    """

    annotation: str
    target_path: str
    selection: LineSelection

    @property
    def from_line(self) -> int | None:
        match self.selection:
            case SingleLine(line=line):
                return line
            case LineRange(start=start):
                return start
        return None

    @property
    def to_line(self) -> int | None:
        if isinstance(self.selection, LineRange):
            return self.selection.end
        return None

    @property
    def is_range(self) -> bool:
        """True unless the reference names a single line."""
        return not isinstance(self.selection, SingleLine)

    @property
    def is_whole_file(self) -> bool:
        return isinstance(self.selection, WholeFile)


def split_meta(meta: str) -> list[str]:
    """Split code-block metadata on unescaped spaces, dropping empty tokens."""
    return [token for token in META_SEPARATOR.split(meta) if token]


def find_file_meta(meta: str | None) -> str | None:
    """Return the first `file=` token of the metadata, if any."""
    if not meta:
        return None
    for token in split_meta(meta):
        if token.startswith(FILE_PREFIX):
            return token
    return None


def unescape_path(raw: str) -> str:
    """Turn escaped spaces (``\\ ``) into plain spaces."""
    return ESCAPED_SPACE.sub(" ", raw)


def parse_reference(annotation: str) -> ParsedReference:
    """
    Parse a `file=` annotation into its target path and line selection.

    Args:
        annotation: Metadata token beginning with ``file=``

    Returns:
        ParsedReference

    Raises:
        MalformedReferenceError: If the annotation does not match the grammar

    Examples:
        >>> parse_reference("file=./a.js#L2-L10").selection
        LineRange(start=2, end=10)
        >>> parse_reference("file=./a.js#L3").selection
        SingleLine(line=3)
        >>> parse_reference("file=./a.js").selection
        WholeFile()
    """
    if not annotation.startswith(FILE_PREFIX):
        raise MalformedReferenceError(annotation, "missing file= prefix")
    if annotation == FILE_PREFIX or annotation[len(FILE_PREFIX) :].startswith("#"):
        raise MalformedReferenceError(annotation, "missing path")

    match = REFERENCE_PATTERN.match(annotation)
    if match is None:
        raise MalformedReferenceError(annotation, "expected file=<path>[#L<from>[-[L<to>]]]")

    path = match.group("path")
    from_group = match.group("from")

    attempt = LINE_SPEC_ATTEMPT.search(path)
    if attempt:
        if from_group is not None:
            raise MalformedReferenceError(annotation, "only one line specification is allowed")
        if attempt.group("lead"):
            raise MalformedReferenceError(annotation, "a line range must state its start line")
        raise MalformedReferenceError(annotation, f"invalid line specification {attempt.group(0)!r}")

    if from_group is None:
        return ParsedReference(annotation=annotation, target_path=path, selection=WholeFile())

    from_line = int(from_group)
    if from_line < 1:
        raise MalformedReferenceError(annotation, "line numbers start at 1")

    if not match.group("dash"):
        return ParsedReference(annotation=annotation, target_path=path, selection=SingleLine(from_line))

    to_group = match.group("to")
    to_line = int(to_group) if to_group is not None else None
    if to_line is not None and to_line < 1:
        raise MalformedReferenceError(annotation, "line numbers start at 1")

    return ParsedReference(annotation=annotation, target_path=path, selection=LineRange(from_line, to_line))
