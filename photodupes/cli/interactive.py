"""
Interactive prompts for the CLI interface.
"""

from __future__ import annotations


def confirm_action(action: str, count: int) -> bool:
    """
    Prompt user to confirm a file action.

    Args:
        action: The action to be performed (e.g., 'delete')
        count: Number of files that will be affected

    Returns:
        True if user confirms (types 'y'), False otherwise

    Examples:
        >>> confirm_action('delete', 42)
        This will delete 42 files. Continue? [y/N]: y
        True
    """
    confirm = input(f"\nThis will {action} {count:,} files. Continue? [y/N]: ")
    return confirm.strip().lower() == 'y'


__all__ = ['confirm_action']
