# tests/core/test_config_management.py
import json
import logging
from unittest.mock import MagicMock

import pytest
from flask import Flask

from faleproxy.core.managers.config_manager import ConfigManager
from faleproxy.core.utils.configure_logging import LogWithTqdm, configure_logger
from faleproxy.core.utils.path_utils import PathUtils
from faleproxy.server import app as app_module

# A small, predictable configuration for the tests
MOCK_SETTINGS_CONTENT = {
    "server": {
        "host": "127.0.0.1",
        "port": 3001
    },
    "rewrite": {
        "target_term": "Yale",
        "replacement_term": "Fale"
    },
    "fetch": {
        "timeout": 15.0
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Points the ConfigManager at a temporary settings.json and reloads the
    real settings again once the test is done.
    """
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    monkeypatch.setattr(PathUtils, 'get_settings_path', lambda: settings_file)
    monkeypatch.delenv("PORT", raising=False)

    manager = ConfigManager()
    manager.reset()
    yield manager, monkeypatch

    monkeypatch.undo()
    manager.reset()


def test_config_manager_is_singleton():
    assert ConfigManager() is ConfigManager()


def test_config_manager_load(config_env):
    manager, _ = config_env
    config = manager.get_all()
    assert config["server"]["port"] == 3001
    assert config["rewrite"]["replacement_term"] == "Fale"


def test_config_manager_get_nested(config_env):
    manager, _ = config_env
    assert manager.get_nested("rewrite.target_term") == "Yale"
    assert manager.get_nested("non.existent.key", "default") == "default"
    assert manager.get_nested("server.port.deeper", "default") == "default"


def test_config_manager_set_nested(config_env):
    manager, _ = config_env

    manager.set_nested("rewrite.replacement_term", "Gale")
    assert manager.get_nested("rewrite.replacement_term") == "Gale"

    manager.set_nested("new_feature.enabled", "True")
    assert manager.get_nested("new_feature.enabled") == "True"

    # Original value is a float, so the string is cast
    manager.set_nested("fetch.timeout", "2.5")
    assert manager.get_nested("fetch.timeout") == 2.5


def test_config_manager_port_env_override(config_env):
    manager, monkeypatch = config_env
    monkeypatch.setenv("PORT", "4000")

    manager.reset()

    assert manager.get_nested("server.port") == 4000
    assert isinstance(manager.get_nested("server.port"), int)


def test_config_manager_ignores_non_numeric_port(config_env, caplog):
    manager, monkeypatch = config_env
    monkeypatch.setenv("PORT", "abc")

    with caplog.at_level(logging.WARNING):
        manager.reset()

    assert manager.get_nested("server.port") == 3001
    assert "Ignoring PORT='abc'" in caplog.text


def test_server_main_starts_with_non_numeric_port(config_env, monkeypatch):
    """argparse defaults are built from config, so a bad PORT must not break startup."""
    manager, env = config_env
    env.setenv("PORT", "abc")
    manager.reset()
    run = MagicMock()
    monkeypatch.setattr(Flask, "run", run)
    monkeypatch.setattr(app_module, "configure_logger", MagicMock())

    app_module.main([])

    assert run.call_args.kwargs["port"] == 3001


def test_config_manager_missing_file(config_env, tmp_path):
    manager, monkeypatch = config_env
    monkeypatch.setattr(PathUtils, 'get_settings_path', lambda: tmp_path / "absent.json")

    manager.reset()

    assert manager.get_all() == {}


def test_config_manager_invalid_json(config_env, tmp_path):
    manager, monkeypatch = config_env
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    monkeypatch.setattr(PathUtils, 'get_settings_path', lambda: broken)

    manager.reset()

    assert manager.get_all() == {}


def test_shipped_settings_exist():
    settings = json.loads(PathUtils.get_settings_path().read_text(encoding="utf-8"))
    assert settings["rewrite"]["target_term"] == "Yale"
    assert (PathUtils.get_static_dir() / "index.html").exists()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logger(restore_root_logger):
    configure_logger("DEBUG", {"rewriter": "WARNING"}, {"urllib3": "ERROR"})

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], LogWithTqdm)
    assert logging.getLogger("rewriter").level == logging.WARNING
    assert logging.getLogger("urllib3").level == logging.ERROR


def test_configure_logger_unknown_level_falls_back(restore_root_logger):
    configure_logger("NOPE")
    assert restore_root_logger.level == logging.INFO
