"""Line extraction from file content."""

from __future__ import annotations

from ...settings import CodeImportOptions
from ...utils.indentation import strip_indent
from ...utils.references import ParsedReference


def extract_lines(
    content: str,
    from_line: int | None,
    is_range: bool,
    to_line: int | None,
    preserve_trailing_newline: bool = False,
    line_separator: str = "\n",
) -> str:
    """Select lines of content, 1-indexed and inclusive.

    Out-of-range line numbers never raise: a start past the end of the file
    or an end before the start both yield "".

    Args:
        content: Full file text
        from_line: First line (default: 1)
        is_range: False selects only from_line
        to_line: Last line (default: end of file)
        preserve_trailing_newline: Keep the empty element produced by a
            trailing separator when reading to end of file
        line_separator: Separator to split on; text read in text mode
            already uses "\\n"

    Returns:
        Selected lines joined with "\\n"

    Examples:
        >>> extract_lines("a\\nb\\nc\\n", 2, True, None)
        'b\\nc'
        >>> extract_lines("a\\nb\\nc\\n", 2, True, None, preserve_trailing_newline=True)
        'b\\nc\\n'
        >>> extract_lines("a\\nb\\nc\\n", 3, True, 2)
        ''
    """
    lines = content.split(line_separator)
    start = from_line or 1

    if not is_range:
        end = start
    elif to_line:
        end = to_line
    elif lines[-1] == "" and not preserve_trailing_newline:
        end = len(lines) - 1
    else:
        end = len(lines)

    return "\n".join(lines[start - 1 : end])


def extract(content: str, reference: ParsedReference, options: CodeImportOptions) -> str:
    """Extract the text a reference selects, applying indentation policy."""
    text = extract_lines(
        content,
        reference.from_line,
        reference.is_range,
        reference.to_line,
        preserve_trailing_newline=options.preserve_trailing_newline,
    )
    if reference.is_whole_file and options.remove_redundant_indentations:
        text = strip_indent(text)
    return text
