"""
Hashing module for the scanner package.

Provides the content hash (exact-duplicate key), the 64-bit difference hash
(near-duplicate key) and the Hamming distance between difference hashes.
"""

from __future__ import annotations

import hashlib
import io
import sys
from typing import Optional

from ..config import HASH_COLUMNS, HASH_ROWS
from .dependencies import Image, imagehash, np, _logger


# Distance reported for hashes that cannot be compared (never matches)
MAX_DISTANCE = sys.maxsize

# Rec. 709 luma coefficients for R, G, B, scaled by LUMA_SCALE
LUMA_WEIGHTS = np.array([2126, 7152, 722], dtype=np.uint32)
LUMA_SCALE = 10000

# Single-channel modes whose values are already luminance
GRAYSCALE_MODES = {"1", "L", "LA", "La", "I", "I;16", "F"}


def calculate_content_hash(data: bytes) -> str:
    """
    SHA-256 of the raw file bytes.

    Args:
        data: Entire file contents

    Returns:
        64-char lowercase hex digest
    """
    return hashlib.sha256(data).hexdigest()


def to_grayscale(img: Image.Image) -> Image.Image:
    """
    Convert to 8-bit luminance with Rec. 709 weights.

    Colour pixels become floor(0.2126 R + 0.7152 G + 0.0722 B); alpha is
    ignored. Pillow's convert('L') applies Rec. 601 weights, so it is only
    used for modes that are already single-channel.
    """
    if img.mode in GRAYSCALE_MODES:
        return img.convert('L')

    rgb = np.asarray(img.convert('RGB'), dtype=np.uint32)
    luma = (rgb @ LUMA_WEIGHTS) // LUMA_SCALE
    return Image.fromarray(luma.astype(np.uint8))


def calculate_perceptual_hash(data: bytes, source: str = "<bytes>") -> Optional[str]:
    """
    Calculate the difference hash (dHash) of an encoded image.

    The image is converted to grayscale (see to_grayscale) and resized to
    exactly 9x8 with Lanczos resampling. Each bit is 1 when a pixel is
    strictly brighter than its right-hand neighbour. Bits are packed
    row-major, most significant first.

    Args:
        data: Encoded image bytes
        source: Name used in log messages

    Returns:
        16-char lowercase hex string, or None if the image cannot be decoded
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            small = to_grayscale(img).resize(
                (HASH_COLUMNS, HASH_ROWS), Image.Resampling.LANCZOS
            )
    except Exception as e:
        _logger.debug(f"Perceptual hash calculation failed for {source}: {e}")
        return None

    # int16 so the comparison can't wrap
    pixels = np.asarray(small, dtype=np.int16)
    diff = pixels[:, :-1] > pixels[:, 1:]
    return str(imagehash.ImageHash(diff))


def hamming_distance(a: str, b: str) -> int:
    """
    Number of differing bits between two hex-encoded hashes.

    Hashes of different lengths, or that are not valid hex, are maximally
    dissimilar and return MAX_DISTANCE.

    Examples:
        >>> hamming_distance('ff00', 'ff01')
        1
        >>> hamming_distance('ff', 'ff00') == MAX_DISTANCE
        True
    """
    try:
        a_bytes = bytes.fromhex(a)
        b_bytes = bytes.fromhex(b)
    except (ValueError, TypeError):
        return MAX_DISTANCE

    if len(a_bytes) != len(b_bytes):
        return MAX_DISTANCE

    return sum(bin(x ^ y).count('1') for x, y in zip(a_bytes, b_bytes))


__all__ = [
    'MAX_DISTANCE',
    'LUMA_WEIGHTS',
    'to_grayscale',
    'calculate_content_hash',
    'calculate_perceptual_hash',
    'hamming_distance',
]
