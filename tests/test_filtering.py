"""
Unit tests for year filtering.
"""

import pytest

from photodupes.models import ImageRecord, MetadataBlock
from photodupes.scanner import available_years, filter_by_years, group_by_year, image_year
from photodupes.scanner.filtering import normalize_year_prefix

# Midday UTC on 1 June of each year
JUNE_2019 = 1559390400
JUNE_2020 = 1591012800
JUNE_2021 = 1622548800
NEW_YEAR_2022 = 1640995200


def record(name, created_at=0, date=None):
    metadata = MetadataBlock(date=date) if date is not None else None
    return ImageRecord(path=f"/photos/{name}", name=name, created_at=created_at, metadata=metadata)


@pytest.fixture
def records():
    return [
        record("a.jpg", created_at=JUNE_2021),
        record("b.jpg", created_at=JUNE_2021, date=JUNE_2019),
        record("c.jpg", created_at=JUNE_2020),
        record("d.jpg"),
        record("e.jpg", created_at=JUNE_2021),
    ]


class TestImageYear:
    """Test image_year function."""

    def test_creation_time(self):
        assert image_year(record("a.jpg", created_at=JUNE_2021)) == "2021"

    def test_capture_date_wins(self):
        assert image_year(record("a.jpg", created_at=JUNE_2021, date=JUNE_2019)) == "2019"

    def test_metadata_without_date_falls_back(self):
        rec = ImageRecord(path="/a.jpg", created_at=JUNE_2020, metadata=MetadataBlock(make="Canon"))
        assert image_year(rec) == "2020"

    def test_no_timestamps(self):
        assert image_year(record("a.jpg")) is None

    def test_zero_capture_date_means_undated(self):
        """A zero timestamp is treated as missing, not as 1970."""
        assert image_year(record("a.jpg", date=0)) is None

    def test_year_boundary_is_utc(self):
        assert image_year(record("a.jpg", created_at=NEW_YEAR_2022)) == "2022"
        assert image_year(record("a.jpg", created_at=NEW_YEAR_2022 - 1)) == "2021"


class TestAvailableYears:
    """Test available_years function."""

    def test_unique_newest_first(self, records):
        assert available_years(records) == ["2021", "2020", "2019"]

    def test_empty(self):
        assert available_years([]) == []


class TestFilterByYears:
    """Test filter_by_years function."""

    def test_no_filter_keeps_everything(self, records):
        assert filter_by_years(records) == records

    def test_selected_years(self, records):
        kept = filter_by_years(records, years=["2019", "2020"])
        assert [r.name for r in kept] == ["b.jpg", "c.jpg"]

    def test_selection_overrides_prefix(self, records):
        kept = filter_by_years(records, years=["2020"], prefix="2021")
        assert [r.name for r in kept] == ["c.jpg"]

    def test_prefix(self, records):
        kept = filter_by_years(records, prefix="202")
        assert [r.name for r in kept] == ["a.jpg", "c.jpg", "e.jpg"]

    def test_prefix_drops_undated(self, records):
        assert "d.jpg" not in [r.name for r in filter_by_years(records, prefix="2")]

    def test_prefix_without_digits_is_ignored(self, records):
        assert filter_by_years(records, prefix="abc") == records

    def test_blank_selection_is_ignored(self, records):
        assert filter_by_years(records, years=["", " "]) == records

    def test_normalize_prefix(self):
        assert normalize_year_prefix("  2a0b21999") == "2021"
        assert normalize_year_prefix(None) == ""


class TestGroupByYear:
    """Test group_by_year function."""

    def test_buckets_newest_first(self, records):
        groups = group_by_year(records)

        assert list(groups) == ["2021", "2020", "2019"]
        assert [r.name for r in groups["2021"]] == ["a.jpg", "e.jpg"]
        assert [r.name for r in groups["2019"]] == ["b.jpg"]

    def test_undated_left_out(self, records):
        grouped = [r.name for bucket in group_by_year(records).values() for r in bucket]
        assert "d.jpg" not in grouped
        assert len(grouped) == 4
