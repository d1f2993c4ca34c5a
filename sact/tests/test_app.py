"""Smoke tests for app initialization."""

import json
import logging

import pytest

from sact.models.resource import ResourceType


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "SAKURACLOUD_ACCESS_TOKEN",
        "SAKURACLOUD_ACCESS_TOKEN_SECRET",
        "SAKURACLOUD_ZONE",
        "SAKURACLOUD_PROFILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials(tmp_path, clean_env):
    """A usacloud profile dir with valid credentials."""
    profile_dir = tmp_path / "usacloud"
    (profile_dir / "default").mkdir(parents=True)
    (profile_dir / "default" / "config.json").write_text(
        json.dumps({"AccessToken": "t", "AccessTokenSecret": "s", "Zone": "is1b"})
    )
    return profile_dir


def test_app_import():
    """App module imports without errors."""
    from sact.app import SactApp
    assert SactApp is not None


def test_services_create(tmp_path, credentials):
    from sact.app import Services

    services = Services.create(config_dir=tmp_path / "config", profile_dir=credentials)
    session = services.dispatcher.session
    assert session.zone == "is1b"
    assert session.resource_type == ResourceType.SERVER
    assert session.loading is True


def test_services_create_flags(tmp_path, credentials):
    from sact.app import Services

    services = Services.create(
        zone="tk1a",
        resource_type=ResourceType.DNS,
        config_dir=tmp_path / "config",
        profile_dir=credentials,
    )
    assert services.dispatcher.session.zone == "tk1a"
    assert services.dispatcher.session.resource_type == ResourceType.DNS


def test_app_instantiation(tmp_path, credentials):
    """App can be instantiated without errors."""
    from sact.app import SactApp, Services

    app = SactApp(Services.create(config_dir=tmp_path / "config", profile_dir=credentials))
    assert app is not None
    assert app.services.notification is not None


def test_main_exits_1_without_credentials(tmp_path, monkeypatch, clean_env, capsys):
    from sact import app as app_module

    monkeypatch.setattr(app_module.Path, "home", lambda: tmp_path)
    assert app_module.main([]) == 1
    err = capsys.readouterr().err
    assert "credentials not found" in err
    assert "usacloud" in err


class TestParser:
    """Tests for command line parsing."""

    def test_defaults(self):
        from sact.app import build_parser

        args = build_parser().parse_args([])
        assert args.log is None
        assert args.log_level == "INFO"
        assert args.zone is None
        assert args.resource_type is None

    def test_type(self):
        from sact.app import build_parser

        args = build_parser().parse_args(["--type", "apprun", "--zone", "is1a", "--log-level", "debug"])
        assert args.resource_type == ResourceType.APPRUN_DEDICATED
        assert args.zone == "is1a"
        assert args.log_level == "DEBUG"

    def test_bad_type(self):
        from sact.app import build_parser

        with pytest.raises(SystemExit):
            build_parser().parse_args(["--type", "mainframe"])

    def test_bad_zone(self):
        from sact.app import build_parser

        with pytest.raises(SystemExit):
            build_parser().parse_args(["--zone", "us-east-1"])


class TestSetupLogging:
    """Tests for log handler setup."""

    def test_null_handler_without_path(self):
        from sact.app import setup_logging

        setup_logging(None, "INFO")
        handlers = logging.getLogger("sact").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_file_handler(self, tmp_path):
        from sact.app import setup_logging

        log_path = tmp_path / "logs" / "sact.log"
        setup_logging(log_path, "DEBUG")
        logger = logging.getLogger("sact.services.dispatcher")
        logger.debug("hello from test")
        for handler in logging.getLogger("sact").handlers:
            handler.flush()
        assert "hello from test" in log_path.read_text()
        assert logging.getLogger("sact").level == logging.DEBUG
        setup_logging(None, "INFO")
