"""
CLI workflow orchestration for photodupes.

Provides the CLIOrchestrator class that parses arguments, builds the
application context and dispatches to the chosen command.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from tqdm import tqdm

from ..context import AppContext, create_context
from ..database import CacheStats
from ..exceptions import CacheInitError
from ..scanner import filter_by_years, group_by_year, has_heif_support
from ..user_config import UserConfig
from ..utils.validators import validate_directory
from .arg_parser import parse_arguments
from .interactive import confirm_action
from .reporting import print_duplicate_report, print_year_report, print_delete_report


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class TqdmProgress:
    """Progress observer that drives a tqdm bar from (current, total) calls."""

    def __init__(self, desc: str = "Processing images"):
        self.desc = desc
        self.pbar: Optional[tqdm] = None

    def __call__(self, current: int, total: int) -> None:
        if self.pbar is None:
            self.pbar = tqdm(total=total, desc=self.desc, unit="img", ncols=80)
        self.pbar.update(current - self.pbar.n)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Commands other than 'config' need the application context; failing to
    open the cache is fatal for them.
    """

    def __init__(self):
        self.logger: Optional[logging.Logger] = None
        self.args = None
        self.user_config: Optional[UserConfig] = None
        self.context: Optional[AppContext] = None

    def run(self, argv: Optional[list[str]] = None) -> int:
        """
        Execute the CLI.

        Args:
            argv: Arguments; sys.argv[1:] if None

        Returns:
            Exit code (0 for success, 1 for error)
        """
        self.args = parse_arguments(argv)
        self.logger = setup_logging(self.args.verbose)
        self.user_config = UserConfig()

        if self.args.command == 'config':
            return self._config_command()

        try:
            self.context = create_context(self.args.data_dir, self.user_config)
        except CacheInitError as e:
            self.logger.error(str(e))
            return 1

        handlers = {
            'scan': self._scan_command,
            'delete': self._delete_command,
            'open': self._open_command,
            'cache': self._cache_command,
            'serve': self._serve_command,
        }
        try:
            return handlers[self.args.command]()
        finally:
            self.context.close()

    def _scan_command(self) -> int:
        directory = str(self.args.directory.resolve())
        is_valid, error = validate_directory(directory)
        if not is_valid:
            self.logger.error(error)
            return 1

        progress = None if self.args.no_progress or self.args.json else TqdmProgress()
        stats = CacheStats()
        try:
            images = self.context.scan(
                directory,
                recursive=not self.args.no_recursive,
                progress_callback=progress,
                stats=stats,
            )
        finally:
            if progress is not None:
                progress.close()

        images = filter_by_years(images, years=self.args.year, prefix=self.args.year_prefix)
        by_year = group_by_year(images) if self.args.group_by_year else None

        exact_groups = self.context.find_exact_duplicates(images)
        similar_groups = self.context.find_similar_duplicates(
            images, threshold=self.args.threshold
        )

        if self.args.json:
            result = {
                'images': [img.to_dict() for img in images],
                'exact_groups': [[img.to_dict() for img in g] for g in exact_groups],
                'similar_groups': [[img.to_dict() for img in g] for g in similar_groups],
            }
            if by_year is not None:
                result['years'] = {
                    year: [img.path for img in bucket] for year, bucket in by_year.items()
                }
            print(json.dumps(result, indent=2))
        else:
            if by_year is not None:
                dated = sum(len(bucket) for bucket in by_year.values())
                print_year_report(by_year, undated=len(images) - dated)
            print_duplicate_report(len(images), exact_groups, similar_groups)

        return 0

    def _delete_command(self) -> int:
        paths = list(self.args.paths)
        if not self.args.yes and not confirm_action('delete', len(paths)):
            self.logger.info("Aborted.")
            return 0

        outcomes = self.context.delete(paths)
        print_delete_report(outcomes)
        return 0 if all(o.deleted for o in outcomes) else 1

    def _open_command(self) -> int:
        return 0 if self.context.open(self.args.path) else 1

    def _cache_command(self) -> int:
        if self.args.cache_action == 'clear':
            self.context.cache.clear()
            print("Cache cleared")
            return 0

        stats = self.context.cache.get_stats()
        print(f"Cache database: {stats['db_path']}")
        print(f"  Entries: {stats['total_entries']:,}")
        print(f"  Size:    {stats['db_size_mb']} MB")
        return 0

    def _serve_command(self) -> int:
        from ..app import serve, LOG_MINIMAL, LOG_QUIET, LOG_VERBOSE

        if self.args.quiet:
            log_level = LOG_QUIET
        elif self.args.verbose:
            log_level = LOG_VERBOSE
        else:
            log_level = LOG_MINIMAL

        serve(
            self.context,
            port=self.args.port,
            open_browser=not self.args.no_browser,
            log_level=log_level,
        )
        return 0

    def _config_command(self) -> int:
        config = self.user_config

        if self.args.init:
            if config.create_example_config():
                print("Created example configuration file at:")
                print(f"  {config.config_file_path}")
                return 0
            print("Failed to create configuration file.")
            return 1

        print(f"Configuration file: {config.config_file_path}")
        if config.config_file_path.exists():
            print("Status: found")
        else:
            print("Status: not found (using defaults)")
            print("\nRun 'photodupes config --init' to create one.")

        print("\nCurrent settings:")
        print(f"  data_dir: {config.data_dir}")
        print(f"  workers: {config.workers or 'auto'}")
        print(f"  max_image_pixels: {config.max_image_pixels:,}")
        print(f"\nHEIC/HEIF support: {'yes' if has_heif_support() else 'no (install pillow-heif)'}")
        return 0


__all__ = ['CLIOrchestrator', 'TqdmProgress', 'setup_logging']
