# src/faleproxy/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package paths.
    Paths are resolved relative to this file so they also work from an
    installed wheel.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the 'faleproxy' package."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_path() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    @staticmethod
    def get_static_dir() -> Path:
        return PathUtils.get_package_root() / "static"
