"""
Metadata extraction for the scanner package.

Reads the capture date, camera make/model and pixel dimensions from
embedded EXIF tags, falling back to a header-only size read when the tags
carry no dimensions.
"""

from __future__ import annotations

import io
from datetime import datetime, timezone
from typing import Optional

from ..models import MetadataBlock
from .dependencies import Image, _logger


# EXIF tag ids (see PIL.ExifTags.TAGS)
TAG_EXIF_IFD = 0x8769
TAG_MAKE = 0x010F
TAG_MODEL = 0x0110
TAG_DATETIME = 0x0132
TAG_DATETIME_ORIGINAL = 0x9003
TAG_PIXEL_X_DIMENSION = 0xA002
TAG_PIXEL_Y_DIMENSION = 0xA003

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"


def _clean_string(value) -> Optional[str]:
    """Strip padding from an ASCII tag value; empty strings become None."""
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode('utf-8', errors='replace')
    text = str(value).strip('\x00').strip().strip('"')
    return text or None


def _as_int(value) -> Optional[int]:
    """Accept SHORT/LONG tag values only."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, tuple) and value and isinstance(value[0], int):
        return value[0]
    return None


def parse_exif_date(value) -> Optional[int]:
    """
    Parse an EXIF date string as a UTC Unix timestamp.

    Examples:
        >>> parse_exif_date('2021:06:01 12:00:00')
        1622548800
        >>> parse_exif_date('0000:00:00 00:00:00') is None
        True
    """
    text = _clean_string(value)
    if not text:
        return None
    try:
        dt = datetime.strptime(text, EXIF_DATE_FORMAT)
    except ValueError:
        return None
    return int(dt.replace(tzinfo=timezone.utc).timestamp())


def read_exif(data: bytes, source: str = "<bytes>") -> Optional[MetadataBlock]:
    """
    Extract the supported EXIF fields.

    DateTimeOriginal (when the photo was taken) is preferred over DateTime
    (when it was last saved).

    Returns:
        MetadataBlock, or None if the file carries no readable EXIF
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            exif = img.getexif()
            if not exif:
                return None
            exif_ifd = exif.get_ifd(TAG_EXIF_IFD)

            date = parse_exif_date(exif_ifd.get(TAG_DATETIME_ORIGINAL))
            if date is None:
                date = parse_exif_date(exif.get(TAG_DATETIME))

            return MetadataBlock(
                date=date,
                make=_clean_string(exif.get(TAG_MAKE)),
                model=_clean_string(exif.get(TAG_MODEL)),
                width=_as_int(exif_ifd.get(TAG_PIXEL_X_DIMENSION)),
                height=_as_int(exif_ifd.get(TAG_PIXEL_Y_DIMENSION)),
            )
    except Exception as e:
        _logger.debug(f"EXIF extraction failed for {source}: {e}")
        return None


def read_header_dimensions(data: bytes) -> Optional[tuple[int, int]]:
    """
    Read (width, height) from the image header without decoding pixels.

    PIL's Image.open is lazy, so .size comes from the header alone.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except Exception:
        return None


def extract_metadata(data: bytes, source: str = "<bytes>") -> Optional[MetadataBlock]:
    """
    Build the metadata block for an image.

    EXIF is read first. When it yields no width (common for PNG/WebP), the
    dimensions come from a header read instead.

    Args:
        data: Entire file contents
        source: Name used in log messages

    Returns:
        MetadataBlock, or None if neither EXIF nor the header yield anything
    """
    metadata = read_exif(data, source)

    if metadata is None or metadata.width is None:
        dims = read_header_dimensions(data)
        if dims is not None:
            if metadata is None:
                metadata = MetadataBlock()
            metadata.width, metadata.height = dims

    return metadata


__all__ = [
    'parse_exif_date',
    'read_exif',
    'read_header_dimensions',
    'extract_metadata',
]
