"""
Utilities package for photodupes.

Provides:
- formatters: Human-readable formatting for numbers, dates and file sizes
- validators: Input validation for API and CLI arguments
- platform: Opening files in the OS default viewer
"""

from __future__ import annotations

from . import formatters
from . import validators
from . import platform

from .formatters import format_number, format_timestamp, format_size
from .validators import validate_directory, validate_path_list
from .platform import open_in_viewer

__all__ = [
    # Submodules
    'formatters',
    'validators',
    'platform',
    # Formatters
    'format_number',
    'format_timestamp',
    'format_size',
    # Validators
    'validate_directory',
    'validate_path_list',
    # Platform
    'open_in_viewer',
]
