"""
File discovery module for the scanner package.

Enumerates candidate image files under a root directory, optionally
descending into subdirectories.
"""

from __future__ import annotations

from pathlib import Path

from ..config import IMAGE_EXTENSIONS
from .dependencies import HAS_HEIF_SUPPORT


def find_image_files(root_path: str | Path, recursive: bool = True) -> list[str]:
    """
    Find all image files in the given directory.

    Args:
        root_path: Directory path to search for images
        recursive: If True, descend the full subtree; else direct children only

    Returns:
        List of absolute file paths as strings (unordered)

    Notes:
        - Only regular files whose lowercased extension is in IMAGE_EXTENSIONS
        - HEIC/HEIF files are skipped if pillow-heif is not installed
        - Unreadable directories and a missing root are skipped silently
        - Files reached via multiple paths (symlinks) are listed once
    """
    root = Path(root_path)

    extensions_to_scan = IMAGE_EXTENSIONS
    if not HAS_HEIF_SUPPORT:
        extensions_to_scan = {ext for ext in IMAGE_EXTENSIONS if ext not in {'.heic', '.heif'}}

    images = []
    seen = set()

    iterator = root.rglob('*') if recursive else root.glob('*')

    for filepath in iterator:
        if filepath.suffix.lower() not in extensions_to_scan:
            continue
        try:
            if not filepath.is_file():
                continue
            resolved = str(filepath.resolve())
        except OSError:
            continue
        if resolved not in seen:
            seen.add(resolved)
            images.append(resolved)

    return images


__all__ = ['find_image_files']
