"""Shared Rich console instances for CLI output."""

from rich.console import Console

console = Console()

# Diagnostics go to stderr so that `embed --stdout` output stays clean
err_console = Console(stderr=True)

__all__ = ["console", "err_console"]
