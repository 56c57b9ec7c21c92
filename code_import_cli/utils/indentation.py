"""Minimum common indentation removal."""

import re
from re import Pattern

# Leading spaces/tabs of lines that contain something else
INDENT_PATTERN: Pattern = re.compile(r"^[ \t]*(?=\S)", re.MULTILINE)


def min_indent(text: str) -> int:
    """Length of the shortest leading whitespace run among non-blank lines."""
    indents = [len(m) for m in INDENT_PATTERN.findall(text)]
    return min(indents, default=0)


def strip_indent(text: str) -> str:
    """
    Remove the indentation shared by every non-blank line.

    Blank lines and lines indented less than the common minimum are left
    untouched.

    Examples:
        >>> strip_indent("    a\\n      b\\n    c")
        'a\\n  b\\nc'
        >>> strip_indent("a\\n  b")
        'a\\n  b'
    """
    indent = min_indent(text)
    if indent == 0:
        return text
    return re.sub(rf"^[ \t]{{{indent}}}", "", text, flags=re.MULTILINE)
