"""Tests for ProfileManager service."""

import json
from pathlib import Path

import pytest

from sact.models.exceptions import ConfigError, CredentialsError
from sact.services.profile import ProfileManager, UserProfile


def write_profile(root: Path, name: str, data: dict) -> None:
    (root / name).mkdir(parents=True, exist_ok=True)
    (root / name / "config.json").write_text(json.dumps(data))


class TestUserProfile:
    """Tests for UserProfile dataclass."""

    def test_to_dict(self):
        profile = UserProfile(access_token="t", access_token_secret="s", zone="is1a")
        assert profile.to_dict() == {"AccessToken": "t", "AccessTokenSecret": "s", "Zone": "is1a"}

    def test_to_dict_without_zone(self):
        assert "Zone" not in UserProfile(access_token="t", access_token_secret="s").to_dict()

    def test_from_dict(self):
        """usacloud's key names are read."""
        profile = UserProfile.from_dict("work", {"AccessToken": "t", "AccessTokenSecret": "s", "Zone": "tk1a"})
        assert profile.name == "work"
        assert profile.access_token == "t"
        assert profile.zone == "tk1a"
        assert profile.has_credentials

    def test_from_dict_null_values(self):
        profile = UserProfile.from_dict("default", {"AccessToken": None, "Zone": ""})
        assert profile.access_token == ""
        assert profile.zone is None
        assert not profile.has_credentials


class TestProfileManager:
    """Tests for ProfileManager."""

    def test_no_profile(self, tmp_path):
        manager = ProfileManager(profile_dir=tmp_path, environ={})
        assert manager.profile.name == "default"
        assert not manager.profile.has_credentials

    def test_default_profile(self, tmp_path):
        write_profile(tmp_path, "default", {"AccessToken": "t", "AccessTokenSecret": "s"})
        manager = ProfileManager(profile_dir=tmp_path, environ={})
        assert manager.profile.access_token == "t"

    def test_current_file_selects_profile(self, tmp_path):
        write_profile(tmp_path, "work", {"AccessToken": "w", "AccessTokenSecret": "s"})
        (tmp_path / "current").write_text("work\n")
        manager = ProfileManager(profile_dir=tmp_path, environ={})
        assert manager.current_profile_name() == "work"
        assert manager.profile.access_token == "w"

    def test_env_profile_wins_over_current(self, tmp_path):
        (tmp_path / "current").write_text("work")
        manager = ProfileManager(profile_dir=tmp_path, environ={"SAKURACLOUD_PROFILE": "other"})
        assert manager.current_profile_name() == "other"

    def test_env_overrides_values(self, tmp_path):
        write_profile(tmp_path, "default", {"AccessToken": "t", "AccessTokenSecret": "s", "Zone": "tk1a"})
        environ = {
            "SAKURACLOUD_ACCESS_TOKEN": "env-t",
            "SAKURACLOUD_ZONE": "is1b",
        }
        profile = ProfileManager(profile_dir=tmp_path, environ=environ).profile
        assert profile.access_token == "env-t"
        assert profile.access_token_secret == "s"
        assert profile.zone == "is1b"

    def test_env_only(self, tmp_path):
        environ = {"SAKURACLOUD_ACCESS_TOKEN": "t", "SAKURACLOUD_ACCESS_TOKEN_SECRET": "s"}
        assert ProfileManager(profile_dir=tmp_path, environ=environ).require_credentials().has_credentials

    def test_corrupt_profile_ignored(self, tmp_path):
        (tmp_path / "default").mkdir()
        (tmp_path / "default" / "config.json").write_text("{not json")
        manager = ProfileManager(profile_dir=tmp_path, environ={})
        assert not manager.profile.has_credentials

    def test_require_credentials_missing(self, tmp_path):
        manager = ProfileManager(profile_dir=tmp_path, environ={})
        with pytest.raises(CredentialsError) as exc_info:
            manager.require_credentials()
        assert isinstance(exc_info.value, ConfigError)
        assert "usacloud" in exc_info.value.suggestion

    def test_require_credentials_needs_secret(self, tmp_path):
        write_profile(tmp_path, "default", {"AccessToken": "t"})
        with pytest.raises(CredentialsError):
            ProfileManager(profile_dir=tmp_path, environ={}).require_credentials()
