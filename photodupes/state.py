"""
Scan state for the photodupes web API.

Holds the progress and results of the most recent scan so the browser can
poll for them.
"""

import threading
from typing import Optional

from .models import ImageRecord


class ScanState:
    """
    In-memory state of the current (or last) scan.

    update_progress is the progress observer handed to AppContext.scan.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        """Reset state to initial values."""
        with self._lock:
            self.status = 'idle'  # idle, scanning, complete, error
            self.directory = ''
            self.recursive = True
            self.current = 0
            self.total = 0
            self.message = ''
            self.error: Optional[str] = None
            self.images: list[ImageRecord] = []

    def begin(self, directory: str, recursive: bool) -> bool:
        """
        Mark a scan as started.

        Returns:
            False if a scan is already running
        """
        with self._lock:
            if self.status == 'scanning':
                return False
            self.status = 'scanning'
            self.directory = directory
            self.recursive = recursive
            self.current = 0
            self.total = 0
            self.message = f'Scanning {directory}'
            self.error = None
            return True

    def update_progress(self, current: int, total: int):
        with self._lock:
            self.current = current
            self.total = total
            self.message = f'Processing images: {current:,}/{total:,}'

    def complete(self, images: list[ImageRecord]):
        with self._lock:
            self.status = 'complete'
            self.images = images
            self.message = f'Scan complete: {len(images):,} images'

    def fail(self, error: str):
        with self._lock:
            self.status = 'error'
            self.error = error
            self.message = 'Scan failed'

    def forget(self, paths: set[str]):
        """Drop deleted paths from the last scan's records."""
        with self._lock:
            self.images = [img for img in self.images if img.path not in paths]

    def snapshot_images(self) -> list[ImageRecord]:
        with self._lock:
            return list(self.images)

    def to_status_dict(self) -> dict:
        """Convert to dictionary for the status endpoint."""
        with self._lock:
            return {
                'status': self.status,
                'directory': self.directory,
                'current': self.current,
                'total': self.total,
                'message': self.message,
                'error': self.error,
                'image_count': len(self.images),
            }
