"""
Scanner package for photodupes.

Provides the scan pipeline (enumerate, hash, cache) and the two duplicate
clustering algorithms.

Public API:
- find_image_files: Discover image files in directories
- calculate_content_hash: SHA-256 of file bytes
- calculate_perceptual_hash: 64-bit difference hash of an image
- hamming_distance: Bit distance between two perceptual hashes
- extract_metadata: Capture date, camera and dimensions
- analyze_file: Process a single file through the cache
- analyze_images_parallel: Process many files on a thread pool
- scan_directory: Full scan of a directory, with cache pruning
- find_exact_duplicates: Group by content hash
- find_similar_duplicates: Group by perceptual-hash distance
- image_year, available_years, filter_by_years, group_by_year: Year filtering
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .file_discovery import find_image_files
from .hashing import (
    MAX_DISTANCE,
    calculate_content_hash,
    calculate_perceptual_hash,
    hamming_distance,
)
from .metadata import extract_metadata
from .analysis import analyze_file
from .parallel import analyze_images_parallel, scan_directory
from .deduplication import (
    find_exact_duplicates,
    find_similar_duplicates,
)
from .filtering import (
    image_year,
    available_years,
    filter_by_years,
    group_by_year,
)

from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    'find_image_files',
    'MAX_DISTANCE',
    'calculate_content_hash',
    'calculate_perceptual_hash',
    'hamming_distance',
    'extract_metadata',
    'analyze_file',
    'analyze_images_parallel',
    'scan_directory',
    'find_exact_duplicates',
    'find_similar_duplicates',
    'image_year',
    'available_years',
    'filter_by_years',
    'group_by_year',
    'has_heif_support',
]
