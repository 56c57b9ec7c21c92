"""Tests for Rich error panels."""

from io import StringIO
from pathlib import Path

from code_import_cli.errors import ConfigurationError
from code_import_cli.errors import MalformedReferenceError
from code_import_cli.errors import OutsideRootError
from code_import_cli.ui.error_display import display_import_error
from rich.console import Console


def render(error, **kwargs) -> tuple[bool, str]:
    buf = StringIO()
    console = Console(file=buf, force_terminal=False, no_color=True, width=200)
    handled = display_import_error(console, error, **kwargs)
    return handled, buf.getvalue()


def test_malformed_reference_panel():
    handled, output = render(MalformedReferenceError("file=a.js#-L2", "a line range must state its start line"))
    assert handled
    assert "Malformed File Reference" in output
    assert "file=a.js#-L2" in output
    assert "Tip:" in output


def test_outside_root_panel_shows_paths():
    handled, output = render(OutsideRootError(Path("/etc/passwd"), Path("/srv/docs")), document="README.md")
    assert handled
    assert "Import Outside Root Directory" in output
    assert "README.md" in output
    assert "/etc/passwd" in output
    assert "/srv/docs" in output


def test_configuration_panel():
    handled, output = render(ConfigurationError('"rootDir" has to be an absolute path'))
    assert handled
    assert "Invalid Configuration" in output


def test_other_errors_not_handled():
    handled, output = render(ValueError("boom"))
    assert not handled
    assert output == ""
