"""
Configuration constants for photodupes.

This module contains the fixed settings of the scan pipeline:
- Supported image extensions
- Near-duplicate threshold and progress throttling
- Default data directory and cache database name
"""

import os

# Fixed allow-list of image extensions considered during a scan
IMAGE_EXTENSIONS = {
    '.jpg', '.jpeg', '.png', '.webp',
    # Decoded through pillow-heif
    '.heic', '.heif',
}

# Maximum Hamming distance (over the 64-bit difference hash) for two images
# to be considered near-duplicates
SIMILARITY_THRESHOLD = 5

# Difference hash geometry: 9 columns x 8 rows yields 8x8 = 64 bits
HASH_COLUMNS = 9
HASH_ROWS = 8

# Emit a progress notification every N completed files (plus first and last)
PROGRESS_EVERY = 10

# Default number of parallel workers; None means os.cpu_count()
DEFAULT_WORKERS = None

# Decompression bomb limit for PIL (pixels)
MAX_IMAGE_PIXELS = 500_000_000

# Data directory holding the cache database
DEFAULT_DATA_DIR = os.path.join(os.path.expanduser('~'), '.photodupes')
CACHE_DB_NAME = 'image_cache.db'
