"""
photodupes
==========
Find exact and near-duplicate images in a photo folder.

Features:
- SHA-256 content hash for byte-identical files
- 64-bit difference hash for visually similar files
- EXIF capture date, camera make/model and dimensions
- SQLite cache keyed on (size, mtime) so unchanged files are never re-read
- Parallel scanning with throttled progress reporting
- JSON web API and CLI
"""

__version__ = "1.0.0"

from .models import ImageRecord, MetadataBlock, DeleteOutcome
from .config import IMAGE_EXTENSIONS, SIMILARITY_THRESHOLD
from .exceptions import PhotoDupesError, CacheInitError
from .database import ImageCache, CacheStats
from .scanner import (
    find_image_files,
    analyze_file,
    scan_directory,
    find_exact_duplicates,
    find_similar_duplicates,
    hamming_distance,
)
from .actions import delete_images
from .context import AppContext, create_context

__all__ = [
    "ImageRecord",
    "MetadataBlock",
    "DeleteOutcome",
    "IMAGE_EXTENSIONS",
    "SIMILARITY_THRESHOLD",
    "PhotoDupesError",
    "CacheInitError",
    "ImageCache",
    "CacheStats",
    "find_image_files",
    "analyze_file",
    "scan_directory",
    "find_exact_duplicates",
    "find_similar_duplicates",
    "hamming_distance",
    "delete_images",
    "AppContext",
    "create_context",
]
