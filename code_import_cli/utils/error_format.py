"""Safe error message formatting utilities.

Ensures exceptions always have useful display messages, even when their
str() representation is empty or too terse to act on (e.g. a bare
PermissionError raised by a file read).
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

# Friendly messages for exception types whose str() may be empty
FRIENDLY_MESSAGES: dict[type, str] = {
    FileNotFoundError: "The referenced file does not exist.",
    IsADirectoryError: "The reference points at a directory, not a file.",
    PermissionError: "Permission denied while reading the referenced file.",
    UnicodeDecodeError: "The file is not valid UTF-8 text.",
    KeyboardInterrupt: "Operation interrupted by user.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Args:
        e: The exception to format
        include_type: Whether to include the exception type name

    Returns:
        A non-empty, user-friendly error message

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'

        >>> format_error_message(PermissionError())
        'PermissionError: Permission denied while reading the referenced file.'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}"

    return f"{error_type}: (no additional details)"


def describe_os_error(e: BaseException) -> str:
    """Short description of a file read failure, without the path.

    OSError's own str() repeats the filename; callers already name it.
    """
    if isinstance(e, OSError) and e.strerror:
        return e.strerror
    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return friendly_msg.rstrip(".")
    return format_error_message(e)


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    File paths such as "[docs]/a.md" would otherwise be eaten as markup tags.

    Args:
        value: Any value to escape (will be converted to str)

    Returns:
        String safe for interpolation into Rich markup f-strings
    """
    return _escape_markup(str(value))
