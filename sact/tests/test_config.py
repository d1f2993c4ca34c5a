"""Tests for configuration loading and zone resolution."""

import json
import stat
from pathlib import Path

from sact.models.resource import ResourceType
from sact.services.config import Config, ConfigManager, resolve_zone


class TestConfig:
    """Tests for Config serialization."""

    def test_defaults(self):
        config = Config()
        assert config.default_zone is None
        assert config.default_resource_type == ResourceType.SERVER
        assert config.page_size == 100
        assert config.request_timeout == 30.0

    def test_round_trip(self):
        config = Config(default_zone="is1a", default_resource_type=ResourceType.DNS, theme="nord")
        assert Config.from_dict(config.to_dict()) == config

    def test_to_dict_omits_unset(self):
        result = Config().to_dict()
        assert "default_zone" not in result
        assert "theme" not in result

    def test_invalid_zone_falls_back(self):
        """An unknown zone is replaced by tk1b."""
        assert Config.from_dict({"default_zone": "us-east-1"}).default_zone == "tk1b"

    def test_resource_type_by_label(self):
        config = Config.from_dict({"default_resource_type": "AppRun Dedicated"})
        assert config.default_resource_type == ResourceType.APPRUN_DEDICATED

    def test_invalid_resource_type(self):
        assert Config.from_dict({"default_resource_type": "mainframe"}).default_resource_type == ResourceType.SERVER

    def test_invalid_numbers(self):
        config = Config.from_dict({"page_size": "lots", "request_timeout": -5})
        assert config.page_size == 100
        assert config.request_timeout == 30.0

    def test_numbers_coerced(self):
        config = Config.from_dict({"page_size": "50", "request_timeout": 10})
        assert config.page_size == 50
        assert config.request_timeout == 10.0


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_file(self, config_manager):
        assert config_manager.config == Config()

    def test_load(self, config_manager):
        config_manager.config_file.write_text(json.dumps({"default_zone": "is1b", "page_size": 20}))
        assert config_manager.config.default_zone == "is1b"
        assert config_manager.config.page_size == 20

    def test_corrupt_file(self, config_manager):
        config_manager.config_file.write_text("{broken")
        assert config_manager.config == Config()

    def test_non_object(self, config_manager):
        config_manager.config_file.write_text("[1, 2]")
        assert config_manager.config == Config()

    def test_save_creates_dir(self, tmp_path: Path):
        manager = ConfigManager(config_dir=tmp_path / "nested" / "sact")
        manager.save_config(Config(default_zone="tk1a"))
        assert ConfigManager(config_dir=tmp_path / "nested" / "sact").config.default_zone == "tk1a"

    def test_saved_file_private(self, config_manager):
        config_manager.save_config(Config())
        mode = config_manager.config_file.stat().st_mode
        assert stat.S_IMODE(mode) == 0o600

    def test_update_theme(self, config_manager):
        config_manager.update_theme("dracula")
        reloaded = ConfigManager(config_dir=config_manager.config_file.parent)
        assert reloaded.config.theme == "dracula"


class TestResolveZone:
    """Zone precedence: flag > config > profile > tk1b."""

    def test_flag_wins(self):
        assert resolve_zone("is1c", Config(default_zone="is1a"), "tk1a") == "is1c"

    def test_config_over_profile(self):
        assert resolve_zone(None, Config(default_zone="is1a"), "tk1a") == "is1a"

    def test_profile(self):
        assert resolve_zone(None, Config(), "is1b") == "is1b"

    def test_default(self):
        assert resolve_zone(None, Config(), None) == "tk1b"

    def test_invalid_skipped(self):
        assert resolve_zone("nowhere", Config(), "bogus") == "tk1b"
