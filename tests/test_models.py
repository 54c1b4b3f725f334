"""
Unit tests for data models.
"""

import pytest

from photodupes.models import ImageRecord, MetadataBlock, DeleteOutcome, format_size


class TestFormatSize:
    """Test format_size helper."""

    def test_bytes(self):
        assert format_size(512) == "512.0 B"

    def test_kilobytes(self):
        assert format_size(2048) == "2.0 KB"

    def test_megabytes(self):
        assert format_size(5 * 1024 * 1024) == "5.0 MB"


class TestMetadataBlock:
    """Test MetadataBlock dataclass."""

    def test_defaults_are_absent(self):
        """Every field is optional."""
        meta = MetadataBlock()
        assert meta.to_dict() == {
            'date': None, 'make': None, 'model': None, 'width': None, 'height': None,
        }

    def test_from_dict_partial(self):
        """Missing keys become None."""
        meta = MetadataBlock.from_dict({'make': 'Nikon', 'width': 640})
        assert meta.make == 'Nikon'
        assert meta.width == 640
        assert meta.date is None
        assert meta.height is None


class TestImageRecord:
    """Test ImageRecord dataclass."""

    def test_size_formatted(self, sample_record):
        assert "KB" in sample_record.size_formatted or "MB" in sample_record.size_formatted

    def test_hash_uses_path(self, sample_record):
        """Records are hashable and keyed by path."""
        other = ImageRecord(path=sample_record.path)
        assert hash(other) == hash(sample_record)
        assert len({sample_record, sample_record}) == 1

    def test_to_dict(self, sample_record):
        data = sample_record.to_dict()
        assert data['path'] == "/test/image.jpg"
        assert data['name'] == "image.jpg"
        assert data['perceptual_hash'] == "0123456789abcdef"
        assert data['metadata']['make'] == "Canon"
        assert data['metadata']['width'] == 1920

    def test_to_dict_without_metadata(self):
        record = ImageRecord(path="/a/b.png", name="b.png")
        assert record.to_dict()['metadata'] is None
        assert record.to_dict()['perceptual_hash'] is None

    def test_from_dict(self, sample_record):
        restored = ImageRecord.from_dict(sample_record.to_dict())
        assert restored == sample_record

    def test_from_dict_derives_name(self):
        """A missing name is taken from the path."""
        record = ImageRecord.from_dict({'path': '/photos/cat.jpg'})
        assert record.name == 'cat.jpg'
        assert record.size == 0
        assert record.metadata is None

    @pytest.mark.parametrize("data", [
        {'path': '/a.jpg', 'content_hash': [1]},
        {'path': '/a.jpg', 'perceptual_hash': {'x': 1}},
        {'path': '/a.jpg', 'size': 'big'},
        {'path': '/a.jpg', 'modified_at': True},
        {'path': '/a.jpg', 'metadata': 'none'},
        {'path': '/a.jpg', 'metadata': {'width': 'wide'}},
        {'path': 42},
        {'path': ''},
    ])
    def test_from_dict_rejects_wrong_types(self, data):
        with pytest.raises(TypeError):
            ImageRecord.from_dict(data)

    def test_from_dict_requires_path(self):
        with pytest.raises(KeyError):
            ImageRecord.from_dict({'name': 'a.jpg'})

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(TypeError):
            ImageRecord.from_dict(["/a.jpg"])


class TestDeleteOutcome:
    """Test DeleteOutcome dataclass."""

    def test_success_omits_error(self):
        outcome = DeleteOutcome(path="/a.jpg", deleted=True)
        assert outcome.to_dict() == {'path': "/a.jpg", 'deleted': True}

    def test_failure_carries_error(self):
        outcome = DeleteOutcome(path="/a.jpg", deleted=False, error="No such file")
        assert outcome.to_dict() == {
            'path': "/a.jpg", 'deleted': False, 'error': "No such file",
        }
