"""Locating and rewriting fenced code blocks in markdown source.

Blocks are found with markdown-it so that fences inside lists, blockquotes
or other code never confuse the scan. Rewriting works on source lines and
leaves everything outside the replaced block contents intact. Line endings
are "\n"; CodeImporter.transform_file restores CRLF documents.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from markdown_it import MarkdownIt

from .models import CodeBlock

# Container markers (list bullets, numbers) become spaces for content lines;
# blockquote markers are kept
_NON_QUOTE = re.compile(r"[^>\s]")


def find_code_blocks(markdown: str) -> list[CodeBlock]:
    """Find all fenced code blocks in document order.

    Args:
        markdown: Markdown source

    Returns:
        List of CodeBlock with 0-based source line spans
    """
    md = MarkdownIt("commonmark")
    lines = markdown.split("\n")
    blocks: list[CodeBlock] = []

    for token in md.parse(markdown):
        if token.type != "fence" or token.map is None:
            continue

        start_line, end_line = token.map
        opening = lines[start_line]
        prefix = opening[: opening.index(token.markup)]

        parts = token.info.strip().split(maxsplit=1)
        lang = parts[0] if parts else ""
        meta = parts[1] if len(parts) > 1 else None

        blocks.append(
            CodeBlock(
                lang=lang,
                meta=meta,
                start_line=start_line,
                end_line=end_line,
                markup=token.markup,
                prefix=prefix,
                closed=_is_closing_fence(lines, start_line, end_line, token.markup),
            )
        )

    return blocks


def _is_closing_fence(lines: list[str], start_line: int, end_line: int, markup: str) -> bool:
    """Check whether the last line of a block span is its closing fence."""
    if end_line - 1 <= start_line or end_line > len(lines):
        return False
    fence_char = re.escape(markup[0])
    pattern = rf"^[\s>]*{fence_char}{{{len(markup)},}}\s*$"
    return re.match(pattern, lines[end_line - 1]) is not None


def _fence_for(content_lines: list[str], markup: str) -> str:
    """Fence long enough not to be closed by a line of the new content."""
    fence_char = markup[0]
    pattern = re.compile(rf"^\s*({re.escape(fence_char)}+)")
    longest = 0
    for line in content_lines:
        m = pattern.match(line)
        if m:
            longest = max(longest, len(m.group(1)))
    if longest >= len(markup):
        return fence_char * (longest + 1)
    return markup


def render_block(lines: list[str], block: CodeBlock, content: str) -> list[str]:
    """Source lines for a block with its content replaced."""
    content_lines = content.split("\n") if content else []
    content_prefix = _NON_QUOTE.sub(" ", block.prefix)
    fence = _fence_for(content_lines, block.markup)

    opening = lines[block.start_line]
    if fence != block.markup:
        after = opening[len(block.prefix) + len(block.markup) :]
        opening = f"{block.prefix}{fence}{after}"

    if block.closed and fence == block.markup:
        closing = lines[block.end_line - 1]
    else:
        closing = f"{content_prefix}{fence}"

    body = [f"{content_prefix}{line}" if line else content_prefix.rstrip() for line in content_lines]
    return [opening, *body, closing]


def replace_block_contents(markdown: str, replacements: Iterable[tuple[CodeBlock, str]]) -> str:
    """Replace the contents of the given blocks.

    Args:
        markdown: Markdown source the blocks were found in
        replacements: (block, new content) pairs

    Returns:
        Rewritten markdown
    """
    lines = markdown.split("\n")
    for block, content in sorted(replacements, key=lambda item: item[0].start_line, reverse=True):
        lines[block.start_line : block.end_line] = render_block(lines, block, content)
    return "\n".join(lines)
