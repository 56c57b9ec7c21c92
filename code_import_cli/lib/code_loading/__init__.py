"""Code loading library for code-import.

This library resolves `file=` annotations on fenced code blocks, reads the
referenced files concurrently, and writes the selected lines back into the
blocks.
"""

from .extractor import extract
from .extractor import extract_lines
from .loader import CodeImporter
from .loader import FileStore
from .loader import LocalFileStore
from .models import CodeBlock
from .models import ImportedBlock
from .models import ResolvedImport
from .models import TransformResult
from .resolver import PathResolver

__all__ = [
    "CodeBlock",
    "CodeImporter",
    "FileStore",
    "ImportedBlock",
    "LocalFileStore",
    "PathResolver",
    "ResolvedImport",
    "TransformResult",
    "extract",
    "extract_lines",
]
