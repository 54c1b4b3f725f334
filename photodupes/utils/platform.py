"""
Platform-specific helpers for photodupes.

Opens files in the operating system's default viewer.
"""

from __future__ import annotations

import logging
import platform as platform_module
import subprocess


logger = logging.getLogger(__name__)


def viewer_command(path: str) -> list[str]:
    """
    Command line that opens path with the OS default application.

    Examples:
        >>> viewer_command('/tmp/a.jpg')  # on Linux
        ['xdg-open', '/tmp/a.jpg']
    """
    system = platform_module.system()
    if system == 'Windows':
        return ['explorer', path]
    if system == 'Darwin':
        return ['open', path]
    return ['xdg-open', path]


def open_in_viewer(path: str) -> bool:
    """
    Launch the OS default viewer for path.

    Returns:
        True if the viewer process was started, False otherwise
    """
    try:
        subprocess.Popen(viewer_command(path))
        return True
    except OSError as e:
        logger.warning(f"Could not open {path}: {e}")
        return False


__all__ = ['viewer_command', 'open_in_viewer']
