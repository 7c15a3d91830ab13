"""Helper functions for CLI output formatting with Rich integration."""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme


class Colors:
    """Standardized color palette for CLI output."""

    SUCCESS = "bold green"
    ERROR = "bold red"
    PRIMARY = "cyan"
    MUTED = "dim"


SKETCHBOX_THEME = Theme(
    {
        "success": Colors.SUCCESS,
        "error": Colors.ERROR,
        "primary": Colors.PRIMARY,
        "muted": Colors.MUTED,
    }
)


def get_console(stderr: bool = False) -> Console:
    """Get a console using the Sketchbox theme."""
    return Console(theme=SKETCHBOX_THEME, stderr=stderr, soft_wrap=True)


def print_success_message(message: str) -> None:
    """Print a success message with a checkmark.

    Args:
        message: The message to print
    """
    get_console().print(f"[success]✓[/success] {escape(message)}")


def print_list_item(item: str, indent: int = 1) -> None:
    """Print a list item with bullet and indentation.

    Args:
        item: The list item to print
        indent: Number of indentation levels (default: 1)
    """
    get_console().print(f"{' ' * (indent * 2)}[primary]•[/primary] {escape(item)}")
