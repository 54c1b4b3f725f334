"""
Tests for utility helpers.
"""

from photodupes.utils import format_timestamp, format_number
from photodupes.utils.platform import viewer_command, open_in_viewer
from photodupes.utils.validators import validate_directory, validate_path_list, parse_bool
from photodupes.state import ScanState
from photodupes.models import ImageRecord


class TestFormatters:
    """Test formatting helpers."""

    def test_format_number(self):
        assert format_number(1234567) == "1,234,567"

    def test_format_timestamp(self):
        assert format_timestamp(1622548800) == "2021-06-01 12:00"
        assert format_timestamp(None) == "-"


class TestValidators:
    """Test input validators."""

    def test_valid_directory(self, temp_dir):
        assert validate_directory(str(temp_dir)) == (True, "")

    def test_empty_directory_path(self):
        assert validate_directory("")[0] is False

    def test_file_is_not_directory(self, sample_images):
        is_valid, error = validate_directory(sample_images['unique'])
        assert is_valid is False
        assert "not a directory" in error

    def test_path_list(self):
        assert validate_path_list(['/a.jpg', '/b.jpg']) == (True, "")
        assert validate_path_list(None)[0] is False
        assert validate_path_list(['/a.jpg', ''])[0] is False
        assert validate_path_list(['/a.jpg', 3])[0] is False

    def test_parse_bool(self):
        assert parse_bool(None, True) == (True, "")
        assert parse_bool(False, True) == (False, "")
        assert parse_bool(' Off ', True) == (False, "")
        assert parse_bool('yes', False) == (True, "")
        assert parse_bool(1, False) == (True, "")

    def test_parse_bool_rejects_other_values(self):
        assert parse_bool('sometimes', True)[0] is None
        assert parse_bool(2, True)[0] is None
        assert parse_bool([], True)[0] is None


class TestPlatform:
    """Test viewer launching."""

    def test_viewer_command_linux(self, monkeypatch):
        monkeypatch.setattr('photodupes.utils.platform.platform_module.system', lambda: 'Linux')
        assert viewer_command('/a.jpg') == ['xdg-open', '/a.jpg']

    def test_viewer_command_macos(self, monkeypatch):
        monkeypatch.setattr('photodupes.utils.platform.platform_module.system', lambda: 'Darwin')
        assert viewer_command('/a.jpg') == ['open', '/a.jpg']

    def test_viewer_command_windows(self, monkeypatch):
        monkeypatch.setattr('photodupes.utils.platform.platform_module.system', lambda: 'Windows')
        assert viewer_command('C:\\a.jpg') == ['explorer', 'C:\\a.jpg']

    def test_launch_failure(self, monkeypatch):
        def broken_popen(cmd):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr('photodupes.utils.platform.subprocess.Popen', broken_popen)
        assert open_in_viewer('/a.jpg') is False


class TestScanState:
    """Test ScanState transitions."""

    def test_begin_twice(self):
        state = ScanState()
        assert state.begin('/photos', True) is True
        assert state.begin('/photos', True) is False

    def test_complete_and_forget(self):
        state = ScanState()
        state.begin('/photos', True)
        state.update_progress(2, 2)
        state.complete([ImageRecord(path='/a.jpg'), ImageRecord(path='/b.jpg')])
        state.forget({'/a.jpg'})

        status = state.to_status_dict()
        assert status['status'] == 'complete'
        assert status['current'] == 2
        assert status['image_count'] == 1
        assert [img.path for img in state.snapshot_images()] == ['/b.jpg']

    def test_fail(self):
        state = ScanState()
        state.begin('/photos', True)
        state.fail('boom')
        assert state.to_status_dict()['error'] == 'boom'
        assert state.begin('/photos', True) is True
