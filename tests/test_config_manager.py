"""Tests for configuration persistence."""

import json

from services.config_manager import ConfigManager


def test_defaults_without_file(config_dir):
    config = ConfigManager.get_instance().get_config()
    assert config["diff"]["contextLines"] == 3
    assert config["diff"]["maxCells"] == 25_000_000
    assert config["server"]["port"] == 8000
    assert not (config_dir / "config.json").exists()


def test_singleton(config_dir):
    assert ConfigManager.get_instance() is ConfigManager.get_instance()


def test_save_and_reload(config_dir):
    ConfigManager.get_instance().save_config({"diff": {"ignoreCase": True}})

    ConfigManager.reset_instance()
    config = ConfigManager.get_instance().get_config()
    assert config["diff"]["ignoreCase"] is True
    # Sibling keys survive a partial update
    assert config["diff"]["contextLines"] == 3

    stored = json.loads((config_dir / "config.json").read_text())
    assert stored["diff"]["ignoreCase"] is True


def test_partial_file_is_merged_over_defaults(config_dir):
    (config_dir / "config.json").write_text(json.dumps({"diff": {"maxCells": 0}}))
    config = ConfigManager.get_instance().get_config()
    assert config["diff"]["maxCells"] == 0
    assert config["diff"]["trimLines"] is False
    assert config["server"]["host"] == "127.0.0.1"


def test_invalid_json_falls_back_to_defaults(config_dir):
    (config_dir / "config.json").write_text("{not json")
    assert ConfigManager.get_instance().get_config()["diff"]["contextLines"] == 3


def test_non_object_json_falls_back_to_defaults(config_dir):
    (config_dir / "config.json").write_text("[1, 2, 3]")
    assert ConfigManager.get_instance().get_config()["diff"]["ignoreCase"] is False


def test_get_after_save(config_dir):
    manager = ConfigManager.get_instance()
    manager.save_config({"server": {"port": 9000}})
    assert manager.get("server")["port"] == 9000
    assert manager.get("server")["host"] == "127.0.0.1"
    assert manager.get("missing", "fallback") == "fallback"


def test_get_config_returns_a_copy(config_dir):
    manager = ConfigManager.get_instance()
    manager.get_config()["diff"]["contextLines"] = 99
    assert manager.get_config()["diff"]["contextLines"] == 3
