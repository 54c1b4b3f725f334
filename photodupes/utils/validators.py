"""
Input validation for photodupes.

Provides validators for directories and path lists received from the HTTP
API and the CLI.
"""

from __future__ import annotations

import os
from typing import Optional


def validate_directory(directory: str) -> tuple[bool, str]:
    """
    Validate that a directory exists and is accessible.

    Args:
        directory: Directory path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, 'Directory not found: /nonexistent/directory')
    """
    if not directory:
        return False, "Directory path is required"

    if not os.path.isabs(directory):
        return False, "Directory must be an absolute path"

    if not os.path.exists(directory):
        return False, f"Directory not found: {directory}"

    if not os.path.isdir(directory):
        return False, f"Path is not a directory: {directory}"

    if not os.access(directory, os.R_OK):
        return False, f"Cannot read directory (permission denied): {directory}"

    return True, ""


def validate_path_list(paths) -> tuple[bool, str]:
    """
    Validate a list of file paths from a request body.

    Examples:
        >>> validate_path_list(['/a.jpg'])
        (True, '')
        >>> validate_path_list('/a.jpg')
        (False, 'Paths must be a list')
    """
    if not isinstance(paths, list):
        return False, "Paths must be a list"
    if not paths:
        return False, "No paths specified"
    if not all(isinstance(p, str) and p for p in paths):
        return False, "Every path must be a non-empty string"
    return True, ""


TRUE_WORDS = {'true', '1', 'yes', 'on'}
FALSE_WORDS = {'false', '0', 'no', 'off'}


def parse_bool(value, default: bool) -> tuple[Optional[bool], str]:
    """
    Interpret a flag from JSON or a query string.

    Returns:
        Tuple of (value, error_message); value is None when invalid

    Examples:
        >>> parse_bool('false', True)
        (False, '')
        >>> parse_bool(None, True)
        (True, '')
        >>> parse_bool('maybe', True)
        (None, "Expected a boolean, got 'maybe'")
    """
    if value is None:
        return default, ""
    if isinstance(value, bool):
        return value, ""
    if isinstance(value, int) and value in (0, 1):
        return bool(value), ""
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True, ""
        if word in FALSE_WORDS:
            return False, ""
    return None, f"Expected a boolean, got {value!r}"


__all__ = ['validate_directory', 'validate_path_list', 'parse_bool']
