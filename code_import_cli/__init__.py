"""code-import - embed regions of source files into markdown code blocks."""

__version__ = "0.1.0"
