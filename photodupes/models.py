"""
Data models for photodupes.

Contains dataclasses for scanned image records, their embedded metadata,
and per-path deletion outcomes.
"""

from dataclasses import dataclass, asdict
from typing import Optional
import os


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def _optional(data: dict, key: str, kind: type):
    """Field value that must be None or of the given type (bool is not an int)."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, kind):
        raise TypeError(f"'{key}' must be {kind.__name__} or null, got {type(value).__name__}")
    return value


def _int_field(data: dict, key: str) -> int:
    value = _optional(data, key, int)
    return 0 if value is None else value


@dataclass
class MetadataBlock:
    """
    Metadata embedded in an image file.

    Every field is optional and may be absent independently.

    Attributes:
        date: Capture date as a Unix timestamp (DateTimeOriginal, else DateTime)
        make: Camera make
        model: Camera model
        width: Pixel width (from tags, or a header read)
        height: Pixel height (from tags, or a header read)
    """
    date: Optional[int] = None
    make: Optional[str] = None
    model: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'MetadataBlock':
        """Create MetadataBlock from dictionary."""
        return cls(
            date=_optional(data, 'date', int),
            make=_optional(data, 'make', str),
            model=_optional(data, 'model', str),
            width=_optional(data, 'width', int),
            height=_optional(data, 'height', int),
        )


@dataclass
class ImageRecord:
    """
    One scanned image file.

    The pair (size, modified_at) is the validity key: if either changes on
    disk, every derived field (hashes, metadata) is stale.

    Attributes:
        path: Full path to the image file (unique key)
        name: File name portion of the path
        size: Size in bytes
        created_at: Creation time (Unix seconds)
        modified_at: Modification time (Unix seconds)
        perceptual_hash: 64-bit difference hash as 16 hex chars, None if undecodable
        content_hash: SHA-256 hex digest of the raw bytes
        metadata: Embedded metadata, None if nothing could be extracted
    """
    path: str
    name: str = ""
    size: int = 0
    created_at: int = 0
    modified_at: int = 0
    perceptual_hash: Optional[str] = None
    content_hash: Optional[str] = None
    metadata: Optional[MetadataBlock] = None

    def __hash__(self):
        return hash(self.path)

    @property
    def size_formatted(self) -> str:
        """Return human-readable file size."""
        return format_size(self.size)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'path': self.path,
            'name': self.name,
            'size': self.size,
            'created_at': self.created_at,
            'modified_at': self.modified_at,
            'perceptual_hash': self.perceptual_hash,
            'content_hash': self.content_hash,
            'metadata': self.metadata.to_dict() if self.metadata else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ImageRecord':
        """
        Create ImageRecord from dictionary.

        Raises:
            KeyError: If 'path' is missing
            TypeError: If a field has the wrong type
        """
        if not isinstance(data, dict):
            raise TypeError(f"record must be an object, got {type(data).__name__}")

        path = data['path']
        if not isinstance(path, str) or not path:
            raise TypeError("'path' must be a non-empty string")

        metadata = _optional(data, 'metadata', dict)
        return cls(
            path=path,
            name=_optional(data, 'name', str) or os.path.basename(path),
            size=_int_field(data, 'size'),
            created_at=_int_field(data, 'created_at'),
            modified_at=_int_field(data, 'modified_at'),
            perceptual_hash=_optional(data, 'perceptual_hash', str),
            content_hash=_optional(data, 'content_hash', str),
            metadata=MetadataBlock.from_dict(metadata) if metadata else None,
        )


@dataclass
class DeleteOutcome:
    """
    Result of attempting to delete one file.

    Attributes:
        path: Path that was requested for deletion
        deleted: True if the file was removed from disk
        error: Error message when deletion failed
    """
    path: str
    deleted: bool
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {'path': self.path, 'deleted': self.deleted}
        if self.error is not None:
            data['error'] = self.error
        return data
