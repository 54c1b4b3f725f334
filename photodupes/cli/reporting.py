"""
Report formatting and display for the CLI interface.

Provides functions to format and print duplicate groups and deletion
outcomes in a human-readable format.
"""

from __future__ import annotations

from ..models import ImageRecord, DeleteOutcome, format_size
from ..utils.formatters import format_number, format_timestamp


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def _describe(img: ImageRecord) -> str:
    """One-line summary of size, dimensions, capture date and camera."""
    parts = [format_size(img.size)]
    meta = img.metadata
    if meta is not None:
        if meta.width and meta.height:
            parts.append(f"{meta.width}x{meta.height}")
        if meta.date is not None:
            parts.append(format_timestamp(meta.date))
        camera = " ".join(p for p in (meta.make, meta.model) if p)
        if camera:
            parts.append(camera)
    return " | ".join(parts)


def _print_groups(groups: list[list[ImageRecord]], section_title: str) -> None:
    """
    Print a section of duplicate groups.

    Args:
        groups: Groups to print
        section_title: Title for the section (e.g., "EXACT DUPLICATES")
    """
    if not groups:
        return

    _print_section_header(section_title)

    for i, group in enumerate(groups, 1):
        print(f"\nGroup {i} ({len(group)} files):")
        for img in sorted(group, key=lambda x: x.path):
            print(f"  {img.path}")
            print(f"      {_describe(img)}")


def print_duplicate_report(
    total_images: int,
    exact_groups: list[list[ImageRecord]],
    similar_groups: list[list[ImageRecord]],
) -> None:
    """
    Print a report of found duplicates.

    Args:
        total_images: Number of images in the scan
        exact_groups: Groups of byte-identical files
        similar_groups: Groups of visually similar files
    """
    print("\n" + "=" * 70)
    print("DUPLICATE IMAGE REPORT")
    print("=" * 70)

    print(f"\nImages scanned: {format_number(total_images)}")
    print(f"Exact duplicate groups: {len(exact_groups)} "
          f"({sum(len(g) for g in exact_groups)} files)")
    print(f"Similar image groups: {len(similar_groups)} "
          f"({sum(len(g) for g in similar_groups)} files)")

    _print_groups(exact_groups, "EXACT DUPLICATES (identical files)")
    _print_groups(similar_groups, "SIMILAR IMAGES (near-duplicates)")

    print("\n" + "=" * 70)


def print_year_report(groups: dict[str, list[ImageRecord]], undated: int = 0) -> None:
    """
    Print how many scanned images fall in each year, newest first.

    Args:
        groups: Records bucketed by year
        undated: Images with neither a capture date nor a creation time
    """
    _print_section_header("IMAGES BY YEAR")
    for year, images in groups.items():
        print(f"  {year}: {format_number(len(images))}")
    if undated:
        print(f"  (no date): {format_number(undated)}")


def print_delete_report(outcomes: list[DeleteOutcome]) -> None:
    """Print one line per deletion outcome and a summary."""
    for outcome in outcomes:
        if outcome.deleted:
            print(f"  deleted  {outcome.path}")
        else:
            print(f"  FAILED   {outcome.path}: {outcome.error}")

    deleted = sum(1 for o in outcomes if o.deleted)
    print(f"\nDeleted {deleted} of {len(outcomes)} files")


__all__ = ['print_duplicate_report', 'print_year_report', 'print_delete_report']
