"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image


def make_gradient(size=(100, 100), descending=True) -> Image.Image:
    """Horizontal grayscale ramp; descending ramps give a dHash of mostly 1 bits."""
    width, height = size
    img = Image.new('L', size)
    for x in range(width):
        value = int(255 * x / (width - 1))
        if descending:
            value = 255 - value
        for y in range(height):
            img.putpixel((x, y), value)
    return img.convert('RGB')


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - identical1.png, identical2.png (byte-identical copies)
        - unique.png (solid red, visually unrelated to the gradients)
        - gradient.jpg (same picture as identical1, re-encoded as JPEG)
        - corrupted.png (image extension, not an image)
        - notes.txt (not an image extension)
    """
    images = {}

    gradient = make_gradient()
    path1 = temp_dir / "identical1.png"
    gradient.save(path1, 'PNG')
    images['identical1'] = str(path1)

    path2 = temp_dir / "identical2.png"
    path2.write_bytes(path1.read_bytes())
    images['identical2'] = str(path2)

    path3 = temp_dir / "unique.png"
    Image.new('RGB', (100, 100), color='red').save(path3, 'PNG')
    images['unique'] = str(path3)

    path4 = temp_dir / "gradient.jpg"
    gradient.save(path4, 'JPEG', quality=90)
    images['gradient_jpeg'] = str(path4)

    path5 = temp_dir / "corrupted.png"
    path5.write_text("not an image")
    images['corrupted'] = str(path5)

    path6 = temp_dir / "notes.txt"
    path6.write_text("not an image either")
    images['notes'] = str(path6)

    return images


@pytest.fixture
def temp_cache_db(temp_dir):
    """Path for a temporary cache database (kept outside the scanned folder)."""
    db_dir = temp_dir.parent / (temp_dir.name + "_db")
    yield str(db_dir / "image_cache.db")
    shutil.rmtree(db_dir, ignore_errors=True)


@pytest.fixture
def cache(temp_cache_db):
    """An ImageCache on a temporary database."""
    from photodupes.database import ImageCache

    image_cache = ImageCache(temp_cache_db)
    yield image_cache
    image_cache.close()


@pytest.fixture
def sample_record():
    """Create an ImageRecord for testing."""
    from photodupes.models import ImageRecord, MetadataBlock

    return ImageRecord(
        path="/test/image.jpg",
        name="image.jpg",
        size=1024000,
        created_at=1600000000,
        modified_at=1600000100,
        perceptual_hash="0123456789abcdef",
        content_hash="ab" * 32,
        metadata=MetadataBlock(date=1599999999, make="Canon", model="EOS R5",
                               width=1920, height=1080),
    )
