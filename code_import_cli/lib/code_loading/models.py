"""Data models for code loading."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from ...utils.references import ParsedReference


@dataclass(frozen=True)
class ResolvedImport:
    """A parsed reference whose target has been resolved to an absolute path.

    Created once per annotated block per processing pass.
    """

    reference: ParsedReference
    absolute_path: Path

    @property
    def from_line(self) -> int | None:
        return self.reference.from_line

    @property
    def to_line(self) -> int | None:
        return self.reference.to_line

    @property
    def is_range(self) -> bool:
        return self.reference.is_range


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block located in a markdown document.

    Attributes:
        lang: Language word of the info string ("" if absent)
        meta: Rest of the info string after the language (None if absent)
        start_line: 0-based line of the opening fence
        end_line: 0-based line after the block (exclusive)
        markup: Fence characters of the opening fence (e.g. "```")
        prefix: Text before the fence on its line (indentation, "> ")
        closed: Whether the block has a closing fence
    """

    lang: str
    meta: str | None
    start_line: int
    end_line: int
    markup: str
    prefix: str
    closed: bool


@dataclass(frozen=True)
class ImportedBlock:
    """Record of one block whose content was imported."""

    block: CodeBlock
    resolved: ResolvedImport
    content: str


@dataclass
class TransformResult:
    """Outcome of transforming one document."""

    markdown: str
    original: str
    imports: list[ImportedBlock] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.markdown != self.original
