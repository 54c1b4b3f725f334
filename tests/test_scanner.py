"""
Unit tests for scanner module.
"""

import io
import logging
import os
import sqlite3
from pathlib import Path

import pytest
from PIL import Image

from photodupes.database import CacheStats
from photodupes.scanner import (
    find_image_files,
    calculate_content_hash,
    calculate_perceptual_hash,
    hamming_distance,
    MAX_DISTANCE,
    analyze_file,
    scan_directory,
)
from photodupes.scanner import analysis as analysis_module
from photodupes.scanner import metadata as metadata_module
from photodupes.scanner.hashing import to_grayscale
from photodupes.scanner.metadata import extract_metadata, parse_exif_date


def encode(img, fmt='PNG', **kwargs) -> bytes:
    buf = io.BytesIO()
    img.save(buf, fmt, **kwargs)
    return buf.getvalue()


def hash_grid(rows) -> str:
    """dHash of an exact 9x8 grayscale image (no resampling happens)."""
    img = Image.new('L', (9, 8))
    img.putdata([value for row in rows for value in row])
    return calculate_perceptual_hash(encode(img))


def write_images(directory: Path, count: int):
    directory.mkdir(parents=True, exist_ok=True)
    for i in range(count):
        Image.new('RGB', (8, 8), color=(i * 9 % 256, 0, 0)).save(directory / f"img_{i:03d}.png")


class TestFindImageFiles:
    """Test find_image_files function."""

    def test_finds_images(self, sample_images, temp_dir):
        """Image extensions are found, other files are not."""
        files = find_image_files(temp_dir)
        names = {os.path.basename(f) for f in files}

        assert names == {
            'identical1.png', 'identical2.png', 'unique.png',
            'gradient.jpg', 'corrupted.png',
        }

    def test_returns_absolute_paths(self, sample_images, temp_dir):
        for f in find_image_files(temp_dir):
            assert os.path.isabs(f)

    def test_recursive(self, temp_dir):
        """Test recursive vs non-recursive search."""
        subdir = temp_dir / "subdir" / "deeper"
        subdir.mkdir(parents=True)
        Image.new('RGB', (4, 4)).save(temp_dir / "top.png")
        Image.new('RGB', (4, 4)).save(subdir / "nested.png")

        recursive = {os.path.basename(f) for f in find_image_files(temp_dir, recursive=True)}
        flat = {os.path.basename(f) for f in find_image_files(temp_dir, recursive=False)}

        assert recursive == {'top.png', 'nested.png'}
        assert flat == {'top.png'}

    def test_extension_case_insensitive(self, temp_dir):
        Image.new('RGB', (4, 4)).save(temp_dir / "SHOUT.JPG", 'JPEG')
        Image.new('RGB', (4, 4)).save(temp_dir / "Mixed.WebP", 'WEBP')

        names = {os.path.basename(f) for f in find_image_files(temp_dir)}
        assert names == {'SHOUT.JPG', 'Mixed.WebP'}

    def test_unsupported_extensions_skipped(self, temp_dir):
        Image.new('RGB', (4, 4)).save(temp_dir / "legacy.bmp", 'BMP')
        Image.new('RGB', (4, 4)).save(temp_dir / "anim.gif", 'GIF')
        assert find_image_files(temp_dir) == []

    def test_directory_named_like_image(self, temp_dir):
        (temp_dir / "folder.jpg").mkdir()
        assert find_image_files(temp_dir) == []

    def test_missing_root(self, temp_dir):
        assert find_image_files(temp_dir / "does-not-exist") == []


class TestHashing:
    """Test content hash, perceptual hash and Hamming distance."""

    def test_content_hash(self):
        digest = calculate_content_hash(b"hello")
        assert digest == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"

    def test_perceptual_hash_format(self, sample_images):
        data = Path(sample_images['identical1']).read_bytes()
        phash = calculate_perceptual_hash(data)

        assert len(phash) == 16
        assert all(c in '0123456789abcdef' for c in phash)

    def test_perceptual_hash_deterministic(self, sample_images):
        data = Path(sample_images['unique']).read_bytes()
        assert calculate_perceptual_hash(data) == calculate_perceptual_hash(data)

    def test_perceptual_hash_undecodable(self, sample_images):
        data = Path(sample_images['corrupted']).read_bytes()
        assert calculate_perceptual_hash(data) is None

    def test_flat_image_hashes_to_zero(self):
        """Equal neighbours never set a bit."""
        data = encode(Image.new('RGB', (50, 30), color='blue'))
        assert calculate_perceptual_hash(data) == "0000000000000000"

    def test_bit_order_first_bit(self):
        """Row 0, column 0 brighter than column 1 sets the most significant bit."""
        rows = [[100] * 9 for _ in range(8)]
        rows[0][0] = 200
        assert hash_grid(rows) == "8000000000000000"

    def test_bit_order_last_bit(self):
        """Row 7, column 7 brighter than column 8 sets the least significant bit."""
        rows = [[100] * 9 for _ in range(8)]
        rows[7][7] = 200
        assert hash_grid(rows) == "0000000000000001"

    def test_strictly_brighter_only(self):
        """A darker left pixel does not set a bit."""
        rows = [[100] * 9 for _ in range(8)]
        rows[0][0] = 50
        assert hash_grid(rows) == "0000000000000000"

    def test_grayscale_uses_rec709_weights(self):
        """Pure red is 0.2126 * 255, truncated."""
        gray = to_grayscale(Image.new('RGB', (1, 1), color=(255, 0, 0)))
        assert gray.mode == 'L'
        assert gray.getpixel((0, 0)) == 54

    def test_grayscale_keeps_neutral_greys(self):
        ramp = Image.new('RGB', (256, 1))
        ramp.putdata([(v, v, v) for v in range(256)])
        assert list(to_grayscale(ramp).getdata()) == list(range(256))

    def test_colour_columns_compare_by_rec709_luma(self):
        """
        Red (luma 54) next to teal (0, 100, 60) (luma 75).

        Teal is brighter under Rec.709, so only the teal-before-red pairs at
        odd columns set bits. A Rec.601 conversion ranks them the other way.
        """
        red, teal = (255, 0, 0), (0, 100, 60)
        img = Image.new('RGB', (9, 8))
        img.putdata([red if x % 2 == 0 else teal for _ in range(8) for x in range(9)])

        assert calculate_perceptual_hash(encode(img)) == "5555555555555555"

    def test_hamming_identical(self):
        assert hamming_distance("ffffffffffffffff", "ffffffffffffffff") == 0

    def test_hamming_counts_bits(self):
        assert hamming_distance("0000000000000000", "000000000000000f") == 4
        assert hamming_distance("0000000000000000", "ffffffffffffffff") == 64

    def test_hamming_symmetric(self):
        a, b = "0123456789abcdef", "fedcba9876543210"
        assert hamming_distance(a, b) == hamming_distance(b, a)

    def test_hamming_length_mismatch(self):
        assert hamming_distance("ff", "ff00") == MAX_DISTANCE

    def test_hamming_invalid_hex(self):
        assert hamming_distance("zz", "ff") == MAX_DISTANCE


class TestMetadata:
    """Test metadata extraction."""

    def test_parse_exif_date(self):
        assert parse_exif_date("2021:06:01 12:00:00") == 1622548800

    def test_parse_exif_date_invalid(self):
        assert parse_exif_date("0000:00:00 00:00:00") is None
        assert parse_exif_date("yesterday") is None
        assert parse_exif_date(None) is None

    def test_png_falls_back_to_header_dimensions(self):
        data = encode(Image.new('RGB', (123, 45)))
        meta = extract_metadata(data)

        assert (meta.width, meta.height) == (123, 45)
        assert meta.date is None
        assert meta.make is None

    def test_jpeg_exif_fields(self):
        exif = Image.Exif()
        exif[0x010F] = "Canon"
        exif[0x0110] = "EOS R5"
        exif[0x0132] = "2020:01:02 03:04:05"
        data = encode(Image.new('RGB', (64, 48)), 'JPEG', exif=exif.tobytes())

        meta = extract_metadata(data)

        assert meta.make == "Canon"
        assert meta.model == "EOS R5"
        assert meta.date == parse_exif_date("2020:01:02 03:04:05")
        # No pixel-dimension tags, so the header supplies them
        assert (meta.width, meta.height) == (64, 48)

    def test_date_original_preferred(self, monkeypatch):
        """DateTimeOriginal wins over DateTime."""

        class FakeExif(dict):
            def get_ifd(self, tag):
                return {0x9003: "2019:05:05 10:00:00", 0xA002: 4000, 0xA003: 3000}

        class FakeImage:
            size = (10, 10)

            def __enter__(self):
                return self

            def __exit__(self, *args):
                return False

            def getexif(self):
                return FakeExif({0x0132: "2022:01:01 00:00:00", 0x010F: "Sony\x00"})

        monkeypatch.setattr(metadata_module.Image, 'open', lambda fp: FakeImage())

        meta = extract_metadata(b"ignored")

        assert meta.date == parse_exif_date("2019:05:05 10:00:00")
        assert meta.make == "Sony"
        assert (meta.width, meta.height) == (4000, 3000)

    def test_undecodable_has_no_metadata(self):
        assert extract_metadata(b"not an image") is None


class TestAnalyzeFile:
    """Test analyze_file function."""

    def test_analyze_valid_image(self, sample_images, cache):
        record = analyze_file(sample_images['unique'], cache)

        assert record is not None
        assert record.path == sample_images['unique']
        assert record.name == 'unique.png'
        assert record.size == os.path.getsize(sample_images['unique'])
        assert record.modified_at == int(os.stat(sample_images['unique']).st_mtime)
        assert record.perceptual_hash == "0000000000000000"
        assert len(record.content_hash) == 64
        assert (record.metadata.width, record.metadata.height) == (100, 100)

    def test_corrupted_image_is_kept(self, sample_images, cache):
        """A file that can't be decoded still yields a record."""
        record = analyze_file(sample_images['corrupted'], cache)

        assert record is not None
        assert record.perceptual_hash is None
        assert record.metadata is None
        assert record.content_hash == calculate_content_hash(b"not an image")

    def test_missing_file(self, temp_dir, cache):
        assert analyze_file(temp_dir / "gone.png", cache) is None

    def test_result_is_cached(self, sample_images, cache):
        record = analyze_file(sample_images['unique'], cache)
        cached = cache.get(record.path, record.modified_at, record.size)
        assert cached == record

    def test_cache_hit_skips_read(self, sample_images, cache, monkeypatch):
        """A valid cached row is returned without reading the file."""
        first = analyze_file(sample_images['unique'], cache)

        def fail_read(path):
            raise AssertionError(f"unexpected read of {path}")

        monkeypatch.setattr(analysis_module, 'read_file_bytes', fail_read)
        stats = CacheStats()

        second = analyze_file(sample_images['unique'], cache, stats)

        assert second == first
        assert stats.cache_hits == 1
        assert stats.cache_misses == 0

    def test_failed_cache_write_still_returns_record(self, sample_images, cache, monkeypatch, caplog):
        """A write the cache rejects is logged and the record is still produced."""
        monkeypatch.setattr(cache, 'set', lambda record: False)
        caplog.set_level(logging.DEBUG, logger='photodupes')

        record = analyze_file(sample_images['unique'], cache)

        assert record is not None
        assert record.content_hash == calculate_content_hash(Path(sample_images['unique']).read_bytes())
        assert cache.get_stats()['total_entries'] == 0
        assert any("not cached" in r.getMessage() for r in caplog.records)


class TestScanDirectory:
    """Test scan_directory function."""

    def test_scan(self, sample_images, temp_dir, cache):
        records = scan_directory(temp_dir, True, cache)
        names = {r.name for r in records}

        assert names == {
            'identical1.png', 'identical2.png', 'unique.png',
            'gradient.jpg', 'corrupted.png',
        }
        by_name = {r.name: r for r in records}
        assert by_name['identical1.png'].content_hash == by_name['identical2.png'].content_hash

    def test_empty_directory_progress(self, temp_dir, cache):
        """An empty scan reports (0, 0) exactly once."""
        calls = []
        records = scan_directory(temp_dir, True, cache, progress_callback=lambda c, t: calls.append((c, t)))

        assert records == []
        assert calls == [(0, 0)]

    def test_progress_throttling(self, temp_dir, cache):
        """Progress fires at 0, every tenth file and at the end."""
        write_images(temp_dir, 25)
        calls = []

        scan_directory(temp_dir, True, cache, progress_callback=lambda c, t: calls.append((c, t)))

        assert calls == [(0, 25), (10, 25), (20, 25), (25, 25)]

    def test_progress_multiple_of_ten(self, temp_dir, cache):
        """The final report is not duplicated when the total is a multiple of ten."""
        write_images(temp_dir, 20)
        calls = []

        scan_directory(temp_dir, True, cache, progress_callback=lambda c, t: calls.append((c, t)))

        assert calls == [(0, 20), (10, 20), (20, 20)]

    def test_second_scan_hits_cache(self, sample_images, temp_dir, cache, monkeypatch):
        """An unchanged tree is served entirely from the cache."""
        first = scan_directory(temp_dir, True, cache)

        reads = []
        original_read = analysis_module.read_file_bytes

        def counting_read(path):
            reads.append(path)
            return original_read(path)

        monkeypatch.setattr(analysis_module, 'read_file_bytes', counting_read)
        stats = CacheStats()

        second = scan_directory(temp_dir, True, cache, stats=stats)

        assert reads == []
        assert stats.total_files == 5
        assert stats.cache_hits == 5
        assert stats.cache_misses == 0
        assert sorted(second, key=lambda r: r.path) == sorted(first, key=lambda r: r.path)

    def test_modified_file_is_reprocessed(self, sample_images, temp_dir, cache):
        scan_directory(temp_dir, True, cache)

        target = sample_images['unique']
        new_mtime = int(os.stat(target).st_mtime) + 100
        os.utime(target, (new_mtime, new_mtime))

        stats = CacheStats()
        records = scan_directory(temp_dir, True, cache, stats=stats)

        assert stats.cache_misses == 1
        assert stats.cache_hits == 4
        updated = next(r for r in records if r.path == target)
        assert updated.modified_at == new_mtime

    def test_removed_file_is_pruned(self, sample_images, temp_dir, cache):
        scan_directory(temp_dir, True, cache)
        assert cache.get_stats()['total_entries'] == 5

        os.remove(sample_images['identical2'])
        records = scan_directory(temp_dir, True, cache)

        assert len(records) == 4
        assert cache.get_stats()['total_entries'] == 4

    def test_non_recursive_scan_prunes_subtree(self, temp_dir, cache):
        """Rows outside the latest scan's result set are dropped."""
        write_images(temp_dir / "sub", 2)
        Image.new('RGB', (4, 4)).save(temp_dir / "top.png")

        scan_directory(temp_dir, True, cache)
        assert cache.get_stats()['total_entries'] == 3

        records = scan_directory(temp_dir, False, cache)
        assert [r.name for r in records] == ['top.png']
        assert cache.get_stats()['total_entries'] == 1

    def test_empty_scan_prunes_everything(self, sample_images, temp_dir, cache):
        scan_directory(temp_dir, True, cache)
        empty = temp_dir / "empty"
        empty.mkdir()

        assert scan_directory(empty, True, cache) == []
        assert cache.get_stats()['total_entries'] == 0

    def test_prune_failure_keeps_results(self, sample_images, temp_dir, cache, monkeypatch, caplog):
        """A failing prune is logged as a warning and the scan still succeeds."""
        def locked_prune(valid_paths):
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(cache, 'prune', locked_prune)
        caplog.set_level(logging.WARNING, logger='photodupes')

        records = scan_directory(temp_dir, True, cache)

        assert len(records) == 5
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any("Cache prune failed" in r.getMessage() for r in warnings)

    @pytest.mark.parametrize("workers", [1, 4])
    def test_worker_counts(self, temp_dir, cache, workers):
        write_images(temp_dir, 12)
        records = scan_directory(temp_dir, True, cache, max_workers=workers)
        assert len(records) == 12
        assert len({r.path for r in records}) == 12
