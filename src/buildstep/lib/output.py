"""Pretty output utilities for the docker build step."""

import os
import sys


# Global color state
_color_enabled = None  # None = auto-detect, True = force on, False = force off


def set_color_enabled(enabled: bool | None) -> None:
    """
    Set global color output preference.

    Parameters
    ----------
    enabled : bool or None
        True to enable colors, False to disable, None to auto-detect.
    """
    global _color_enabled
    _color_enabled = enabled


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"


def supports_color() -> bool:
    """
    Check if the terminal supports color output.

    Returns
    -------
    bool
        True if stdout is a TTY, NO_COLOR is unset and platform is not Windows.
    """
    if _color_enabled is not None:
        return _color_enabled

    if os.environ.get("NO_COLOR"):
        return False

    return sys.stdout.isatty() and not sys.platform.startswith("win")


def colorize(text: str, color: str) -> str:
    """
    Colorize text if terminal supports it.

    Parameters
    ----------
    text : str
        Text to colorize.
    color : str
        ANSI color code from the Colors class.

    Returns
    -------
    str
        Colorized text if supported, plain text otherwise.
    """
    if supports_color():
        return f"{color}{text}{Colors.RESET}"
    return text


def success(message: str) -> None:
    """
    Print success message with green checkmark.

    Parameters
    ----------
    message : str
        Success message to display.
    """
    symbol = colorize("✓", Colors.GREEN)
    print(f"{symbol} {message}")


def error(message: str) -> None:
    """
    Print error message with red X symbol to stderr.

    Parameters
    ----------
    message : str
        Error message to display.
    """
    symbol = colorize("✗", Colors.RED)
    print(f"{symbol} {message}", file=sys.stderr)


def warning(message: str) -> None:
    """
    Print warning message with yellow warning symbol.

    Parameters
    ----------
    message : str
        Warning message to display.
    """
    symbol = colorize("⚠", Colors.YELLOW)
    print(f"{symbol} {message}")


def info(message: str) -> None:
    """
    Print informational message with indentation.

    Parameters
    ----------
    message : str
        Informational message to display.
    """
    print(f"  {message}")


def header(message: str) -> None:
    """
    Print header message in bold.

    Parameters
    ----------
    message : str
        Header message to display.
    """
    text = colorize(message, Colors.BOLD)
    print(f"\n{text}")
