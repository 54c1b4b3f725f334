"""
Deduplication module for the scanner package.

Provides exact grouping by content hash and greedy near-duplicate grouping
by perceptual-hash distance.
"""

from __future__ import annotations

from collections import defaultdict

from ..config import SIMILARITY_THRESHOLD
from ..models import ImageRecord
from .hashing import hamming_distance


def find_exact_duplicates(images: list[ImageRecord]) -> list[list[ImageRecord]]:
    """
    Find exact duplicate images based on content hash.

    Records without a content hash are ignored.

    Args:
        images: Records to check

    Returns:
        Groups of two or more records sharing one content hash
    """
    hash_groups: dict[str, list[ImageRecord]] = defaultdict(list)

    for img in images:
        if img.content_hash:
            hash_groups[img.content_hash].append(img)

    return [group for group in hash_groups.values() if len(group) > 1]


def find_similar_duplicates(
    images: list[ImageRecord],
    threshold: int = SIMILARITY_THRESHOLD,
) -> list[list[ImageRecord]]:
    """
    Find visually similar images by perceptual-hash distance.

    Greedy single pass in input order. Each unassigned record seeds a group;
    later unassigned records join if they are within `threshold` of ANY
    current member, so groups can chain (A~B, B~C groups A, B, C even when
    A and C are further apart). Group composition therefore depends on input
    order. Quadratic in the number of hashed records.

    Args:
        images: Records to check; those without a perceptual hash are ignored
        threshold: Maximum Hamming distance (inclusive)

    Returns:
        Groups of two or more records
    """
    candidates = [img for img in images if img.perceptual_hash]
    assigned = [False] * len(candidates)
    groups: list[list[ImageRecord]] = []

    for i, seed in enumerate(candidates):
        if assigned[i]:
            continue

        group = [seed]

        for j in range(i + 1, len(candidates)):
            if assigned[j]:
                continue
            candidate_hash = candidates[j].perceptual_hash
            if any(
                hamming_distance(member.perceptual_hash, candidate_hash) <= threshold
                for member in group
            ):
                group.append(candidates[j])
                assigned[j] = True

        if len(group) > 1:
            assigned[i] = True
            groups.append(group)

    return groups


__all__ = [
    'find_exact_duplicates',
    'find_similar_duplicates',
]
