"""
Scan orchestration for the photodupes web API.

Provides the ScanOrchestrator class that runs a scan on a background thread
and mirrors its progress and results into the shared ScanState.
"""

from __future__ import annotations

import logging

from ..context import AppContext
from ..database import CacheStats
from ..state import ScanState


_logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """
    Runs one scan and records the outcome in a ScanState.

    The state must already have been moved to 'scanning' via
    ScanState.begin() by the caller.
    """

    def __init__(
        self,
        context: AppContext,
        scan_state: ScanState,
        directory: str,
        recursive: bool = True,
    ):
        self.context = context
        self.scan_state = scan_state
        self.directory = directory
        self.recursive = recursive
        self.stats = CacheStats()

    def run(self) -> None:
        """Execute the scan (thread target)."""
        try:
            images = self.context.scan(
                self.directory,
                recursive=self.recursive,
                progress_callback=self.scan_state.update_progress,
                stats=self.stats,
            )
        except Exception as e:
            _logger.exception(f"Scan of {self.directory} failed: {e}")
            self.scan_state.fail(str(e))
            return

        self.scan_state.complete(images)


__all__ = ['ScanOrchestrator']
