"""Clean error display for code import failures."""

import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..errors import CodeImportError
from ..errors import ConfigurationError
from ..errors import FileAccessError
from ..errors import MalformedReferenceError
from ..errors import OutsideRootError
from ..utils.error_format import format_error_message


def _title_for(error: CodeImportError) -> str:
    if isinstance(error, ConfigurationError):
        return "Invalid Configuration"
    if isinstance(error, MalformedReferenceError):
        return "Malformed File Reference"
    if isinstance(error, OutsideRootError):
        return "Import Outside Root Directory"
    if isinstance(error, FileAccessError):
        return "Unreadable File"
    return "Code Import Failed"


def _get_actionable_tip(error: CodeImportError) -> str:
    """Return an actionable tip based on the error type."""
    if isinstance(error, ConfigurationError):
        return "Set root_dir to an absolute path (code-import config set root_dir /abs/path)."
    if isinstance(error, MalformedReferenceError):
        return "Use file=<path>, file=<path>#L<n>, file=<path>#L<n>- or file=<path>#L<n>-L<m>."
    if isinstance(error, OutsideRootError):
        return "Move the file under the root directory, change --root-dir, or pass --allow-outside."
    if isinstance(error, FileAccessError):
        return "Check the path relative to the document, and that the file is readable UTF-8 text."
    return "Re-run with --verbose for a traceback."


def display_import_error(
    console: Console, error: Exception, document: str | None = None, verbose: bool = False
) -> bool:
    """Display a CodeImportError with clean Rich formatting.

    Args:
        console: Rich console for output
        error: The error to display
        document: Document being transformed, if any
        verbose: If True, also print traceback

    Returns:
        True if error was handled, False if not (caller should handle)
    """
    if not isinstance(error, CodeImportError):
        return False

    content = Text()
    if document:
        content.append("Document: ", style="dim")
        content.append(document, style="bold cyan")
        content.append("\n\n")

    content.append(format_error_message(error, include_type=False), style="white")

    details = Table(show_header=False, box=None, padding=(0, 1))
    details.add_column("Field", style="dim")
    details.add_column("Value", style="bold")
    annotation = getattr(error, "annotation", None)
    if annotation:
        details.add_row("Annotation", annotation)
    path = getattr(error, "path", None)
    if path:
        details.add_row("Path", str(path))
    root_dir = getattr(error, "root_dir", None)
    if root_dir:
        details.add_row("Root", str(root_dir))

    console.print()
    console.print(
        Panel(
            content,
            title=f"[bold red]{_title_for(error)}[/bold red]",
            border_style="red",
            padding=(1, 2),
        )
    )
    if details.row_count:
        console.print(details)
        console.print()

    console.print(f"[dim]Tip: {_get_actionable_tip(error)}[/dim]")
    console.print()

    if verbose:
        console.print("[dim]─── Traceback ───[/dim]")
        if sys.exc_info()[0] is not None:
            console.print_exception()

    return True
