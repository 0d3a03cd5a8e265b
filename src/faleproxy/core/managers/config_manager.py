# src/faleproxy/core/managers/config_manager.py
import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

from faleproxy.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

# Environment variables that override a settings.json key, with the type they parse to
ENV_OVERRIDES: Dict[str, Tuple[str, type]] = {
    "PORT": ("server.port", int),
}


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads settings from settings.json, applies environment overrides and
    allows for in-memory modifications.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'rewrite.target_term'.
        """
        value = self._config
        for key in key_path.split('.'):
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        The new value is cast to the type of the value it replaces.
        """
        keys = key_path.split('.')
        d = self._config
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        original_value = d.get(keys[-1])
        if original_value is not None:
            try:
                value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as string.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def reset(self):
        """Reloads the configuration from settings.json and the environment."""
        try:
            config_path = PathUtils.get_settings_path()
            if not config_path.exists():
                logger.warning("settings.json not found at %s. Using empty config.", config_path)
                self._config = {}
            else:
                with open(config_path, "r", encoding="utf-8") as f:
                    self._config = json.load(f)
                logger.info("Configuration has been (re)loaded from settings.json.")
        except Exception as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Applies environment overrides; unparseable values keep the file value."""
        for env_name, (key_path, value_type) in ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if not raw:
                continue
            try:
                value = value_type(raw.strip())
            except (ValueError, TypeError):
                logger.warning(
                    "Ignoring %s=%r: not a valid %s. Keeping %s = %r.",
                    env_name, raw, value_type.__name__, key_path, self.get_nested(key_path)
                )
                continue
            self.set_nested(key_path, value)


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
