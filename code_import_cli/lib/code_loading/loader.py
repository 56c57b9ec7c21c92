"""Document transformation: import referenced code into annotated blocks."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from ...errors import FileAccessError
from ...settings import CodeImportOptions
from ...utils.error_format import describe_os_error
from ...utils.references import find_file_meta
from ...utils.references import parse_reference
from .extractor import extract
from .models import CodeBlock
from .models import ImportedBlock
from .models import ResolvedImport
from .models import TransformResult
from .resolver import PathResolver
from .walker import find_code_blocks
from .walker import replace_block_contents

logger = logging.getLogger(__name__)


class FileStore(Protocol):
    """Protocol for reading referenced files."""

    async def read_text(self, path: Path) -> str:
        """Return the UTF-8 text of path, raising OSError on failure."""
        ...


class LocalFileStore:
    """Reads files from the local filesystem in a worker thread."""

    async def read_text(self, path: Path) -> str:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")


class CodeImporter:
    """Replaces the content of `file=` annotated code blocks with file regions.

    Features:
    - One concurrent read per annotated block
    - All-or-nothing: the first failure aborts the document, nothing is
      rewritten
    - Root containment unless outside imports are allowed

    Usage:
        importer = CodeImporter(CodeImportOptions(root_dir=Path("/srv/docs")))
        result = await importer.transform(markdown, base_dir=Path("/srv/docs/guide"))
    """

    def __init__(self, options: CodeImportOptions | None = None, file_store: FileStore | None = None):
        """Initialize importer.

        Args:
            options: Import options (default: CodeImportOptions())
            file_store: Source of file text (default: LocalFileStore)

        Raises:
            ConfigurationError: If options.root_dir is not absolute
        """
        self.options = options or CodeImportOptions()
        self.file_store = file_store or LocalFileStore()
        self.resolver = PathResolver(
            root_dir=self.options.effective_root_dir(),
            allow_outside=self.options.allow_importing_from_outside,
        )

    def resolve(self, annotation: str, base_dir: Path) -> ResolvedImport:
        """Parse an annotation and resolve its target.

        Raises:
            MalformedReferenceError: If the annotation is invalid
            OutsideRootError: If the target escapes the root directory
        """
        reference = parse_reference(annotation)
        absolute_path = self.resolver.resolve(reference.target_path, base_dir)
        return ResolvedImport(reference=reference, absolute_path=absolute_path)

    async def load(self, resolved: ResolvedImport) -> str:
        """Read the resolved file and extract the referenced lines.

        Raises:
            FileAccessError: If the file cannot be read as UTF-8 text
        """
        path = resolved.absolute_path
        try:
            content = await self.file_store.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(path, resolved.reference.annotation, describe_os_error(e)) from e

        return extract(content, resolved.reference, self.options)

    async def import_reference(self, annotation: str, base_dir: Path) -> str:
        """Text that a single annotation imports."""
        return await self.load(self.resolve(annotation, base_dir))

    async def transform(self, markdown: str, base_dir: Path) -> TransformResult:
        """Import code into every annotated block of a document.

        All annotations are parsed and resolved before any file is read, so
        reference errors surface without touching the filesystem.

        Args:
            markdown: Markdown source
            base_dir: Directory of the document (relative targets resolve here)

        Returns:
            TransformResult with the rewritten markdown

        Raises:
            CodeImportError: First failure among the blocks
        """
        pending: list[tuple[CodeBlock, ResolvedImport]] = []
        for block in find_code_blocks(markdown):
            annotation = find_file_meta(block.meta)
            if annotation is None:
                continue
            pending.append((block, self.resolve(annotation, base_dir)))

        if not pending:
            return TransformResult(markdown=markdown, original=markdown)

        logger.debug(f"Importing {len(pending)} code block(s) relative to {base_dir}")
        contents = await asyncio.gather(*(self.load(resolved) for _, resolved in pending))

        imports = [
            ImportedBlock(block=block, resolved=resolved, content=content)
            for (block, resolved), content in zip(pending, contents, strict=True)
        ]
        rewritten = replace_block_contents(markdown, ((item.block, item.content) for item in imports))
        return TransformResult(markdown=rewritten, original=markdown, imports=imports)

    def transform_sync(self, markdown: str, base_dir: Path) -> TransformResult:
        """Synchronous wrapper around transform()."""
        return asyncio.run(self.transform(markdown, base_dir))

    async def transform_file(self, path: Path) -> TransformResult:
        """Transform a markdown file, resolving references from its directory.

        The file itself is not written. A document that uses CRLF line
        endings throughout keeps them; mixed endings are rewritten as LF
        only when a block changes.

        Raises:
            FileAccessError: If the document cannot be read as UTF-8 text
            CodeImportError: First failure among the blocks
        """
        path = Path(path).absolute()
        try:
            with open(path, encoding="utf-8", newline="") as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(path, None, describe_os_error(e)) from e

        markdown = source.replace("\r\n", "\n")
        result = await self.transform(markdown, base_dir=path.parent)

        if result.markdown == markdown:
            rewritten = source
        elif "\r\n" in source and source.count("\r\n") == source.count("\n"):
            rewritten = result.markdown.replace("\n", "\r\n")
        else:
            rewritten = result.markdown
        return TransformResult(markdown=rewritten, original=source, imports=result.imports)
