"""
Exception hierarchy for photodupes.

Per-file failures during a scan are never raised to the caller; only
failures that prevent the application from starting surface as exceptions.
"""


class PhotoDupesError(Exception):
    """Base exception for all photodupes errors."""
    pass


class CacheInitError(PhotoDupesError):
    """Raised when the cache database or its directory cannot be created or opened."""
    pass
