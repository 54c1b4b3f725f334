"""
CLI package for photodupes.

Provides the command-line interface for scanning directories, reporting
duplicate groups, deleting files and running the web API.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
"""

from __future__ import annotations

from typing import Optional

from .orchestrator import CLIOrchestrator, TqdmProgress, setup_logging
from .arg_parser import create_parser, parse_arguments
from .reporting import print_duplicate_report, print_delete_report
from .interactive import confirm_action


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    orchestrator = CLIOrchestrator()
    return orchestrator.run(argv)


__all__ = [
    'main',
    'CLIOrchestrator',
    'TqdmProgress',
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_duplicate_report',
    'print_delete_report',
    'confirm_action',
]
