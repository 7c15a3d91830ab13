"""Helper functions for CLI commands."""

from sketchbox.cli.helpers.output import print_list_item, print_success_message


__all__ = ["print_list_item", "print_success_message"]
