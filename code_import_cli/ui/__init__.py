"""UI helpers for CLI environment."""

from .error_display import display_import_error

__all__ = ["display_import_error"]
