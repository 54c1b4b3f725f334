"""
User configuration for photodupes.

Each setting is resolved in this order, first match wins:
1. Environment variable
2. config.json in the config directory
3. Built-in default from config.py

The config directory is ~/.photodupes unless PHOTODUPES_CONFIG_DIR (or an
explicit config_dir argument) says otherwise.

Example config.json:
{
    "data_dir": null,
    "workers": 4,
    "max_image_pixels": 500000000
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    DEFAULT_DATA_DIR,
    DEFAULT_WORKERS,
    MAX_IMAGE_PIXELS,
)

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Settings read from the environment and an optional JSON file.

    The file is parsed on first use; call reload() to pick up edits.
    """

    def __init__(self, config_dir: Optional[str] = None):
        self._config_dir = config_dir
        self._file_values: Optional[dict] = None

    @property
    def config_dir(self) -> Path:
        if self._config_dir:
            return Path(self._config_dir)
        return Path(os.getenv('PHOTODUPES_CONFIG_DIR') or DEFAULT_DATA_DIR)

    @property
    def config_file_path(self) -> Path:
        return self.config_dir / 'config.json'

    def _read_file(self) -> dict:
        path = self.config_file_path
        if not path.is_file():
            return {}

        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config file {path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {path}: top level is not an object")
            return {}

        logger.debug(f"Read settings from {path}")
        return data

    def _file(self) -> dict:
        if self._file_values is None:
            self._file_values = self._read_file()
        return self._file_values

    def reload(self):
        """Forget the parsed file so the next lookup reads it again."""
        self._file_values = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Resolve one setting.

        Args:
            key: Key in config.json
            default: Returned when neither source sets the value
            env_var: Environment variable consulted first, if given

        Returns:
            The environment value (decoded as JSON when it parses, so "4"
            becomes 4), else the file value, else default
        """
        if env_var:
            raw = os.getenv(env_var)
            if raw is not None:
                try:
                    return json.loads(raw)
                except ValueError:
                    return raw

        value = self._file().get(key)
        return default if value is None else value

    @property
    def data_dir(self) -> str:
        """Directory holding the cache database."""
        return str(self.get('data_dir', default=DEFAULT_DATA_DIR, env_var='PHOTODUPES_DATA_DIR'))

    def get_positive_int(
        self,
        key: str,
        default: Optional[int],
        env_var: Optional[str] = None,
    ) -> Optional[int]:
        """
        Resolve a setting that must be an integer >= 1.

        Numeric strings are accepted. Anything else (zero, negatives,
        fractions, booleans, words) is logged and replaced by default.
        """
        value = self.get(key, default=default, env_var=env_var)
        if value is None:
            return default

        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                pass

        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            source = env_var if env_var and os.getenv(env_var) is not None else self.config_file_path
            logger.warning(f"Invalid {key} {value!r} (from {source}); using {default!r}")
            return default

        return value

    @property
    def workers(self) -> Optional[int]:
        """Scan thread count; None means one per CPU."""
        return self.get_positive_int('workers', DEFAULT_WORKERS, env_var='PHOTODUPES_WORKERS')

    @property
    def max_image_pixels(self) -> int:
        """Pillow decompression-bomb limit."""
        return self.get_positive_int('max_image_pixels', MAX_IMAGE_PIXELS, env_var='PHOTODUPES_MAX_PIXELS')

    def create_example_config(self) -> bool:
        """
        Write a starter config.json holding the defaults.

        Returns:
            True if the file was written
        """
        starter = {
            "_comment": "photodupes user configuration",
            "data_dir": None,
            "workers": DEFAULT_WORKERS,
            "max_image_pixels": MAX_IMAGE_PIXELS,
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_file_path.write_text(json.dumps(starter, indent=2), encoding='utf-8')
        except OSError as e:
            logger.error(f"Could not write {self.config_file_path}: {e}")
            return False

        logger.info(f"Wrote example config to {self.config_file_path}")
        return True
