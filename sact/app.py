"""sact: terminal browser for Sakura Cloud resources.

Main Textual application and command-line entry point.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from sact.models.exceptions import ConfigError
from sact.models.resource import ZONES, ResourceType
from sact.models.session import initial_session
from sact.screens.main import BrowserScreen
from sact.services.cloud import FetchAggregator, SakuraClient
from sact.services.config import ConfigManager, resolve_zone
from sact.services.dispatcher import CommandDispatcher
from sact.services.notification import NotificationService
from sact.services.profile import ProfileManager
from sact.styles import BASE_CSS

logger = logging.getLogger("sact")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Services:
    """Application service container for dependency injection."""

    config: ConfigManager
    profile: ProfileManager
    notification: NotificationService
    dispatcher: CommandDispatcher

    @classmethod
    def create(
        cls,
        zone: str | None = None,
        resource_type: ResourceType | None = None,
        config_dir: Path | None = None,
        profile_dir: Path | None = None,
    ) -> "Services":
        """Wire up all services.

        Args:
            zone: Zone given on the command line, if any
            resource_type: Resource type given on the command line, if any
            config_dir: Override for ~/.config/sact
            profile_dir: Override for ~/.usacloud

        Raises:
            CredentialsError: if no access token/secret can be found
        """
        config = ConfigManager(config_dir)
        profile = ProfileManager(profile_dir)
        credentials = profile.require_credentials()

        settings = config.config
        client = SakuraClient(
            credentials.access_token,
            credentials.access_token_secret,
            timeout=settings.request_timeout,
        )
        aggregator = FetchAggregator(client, page_size=settings.page_size)

        session = initial_session(
            zone=resolve_zone(zone, settings, credentials.zone),
            resource_type=resource_type or settings.default_resource_type,
        )
        logger.info(
            f"Starting in zone {session.zone} with {session.resource_type.label} "
            f"(profile {credentials.name!r})"
        )

        return cls(
            config=config,
            profile=profile,
            notification=NotificationService(),
            dispatcher=CommandDispatcher(aggregator, session),
        )


class SactApp(App):
    """The sact application."""

    TITLE = "sact"
    CSS = BASE_CSS + """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "screenshot", "Screenshot", show=False),
    ]

    def __init__(self, services: Services, **kwargs):
        super().__init__(**kwargs)
        self.services = services
        self._theme_restored = False

    def on_mount(self) -> None:
        """Apply saved theme and open the browser."""
        saved_theme = self.services.config.config.theme
        if saved_theme and saved_theme in self.available_themes:
            self.theme = saved_theme
        self._theme_restored = True

        self.push_screen(BrowserScreen(
            self.services.dispatcher,
            self.services.notification,
        ))

    def watch_theme(self, theme: str) -> None:
        """Persist theme changes made from the command palette."""
        if self._theme_restored:
            self.services.config.update_theme(theme)


def _resource_type(value: str) -> ResourceType:
    """argparse type for resource type names."""
    try:
        return ResourceType.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sact",
        description="Browse Sakura Cloud resources in the terminal.",
    )
    parser.add_argument(
        "--log",
        metavar="PATH",
        type=Path,
        help="write logs to PATH (the terminal belongs to the UI)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="log level (default: INFO)",
    )
    parser.add_argument(
        "--zone",
        choices=ZONES,
        help="starting zone (default: config, then usacloud profile, then tk1b)",
    )
    parser.add_argument(
        "--type",
        dest="resource_type",
        type=_resource_type,
        help="starting resource type, e.g. server, dns, apprun",
    )
    return parser


def setup_logging(log_path: Path | None, level: str) -> None:
    """Send sact logs to `log_path`, or nowhere.

    Never logs to the terminal, which Textual owns while running.
    """
    root = logging.getLogger("sact")
    root.setLevel(getattr(logging, level, logging.INFO))
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    if log_path is None:
        root.addHandler(logging.NullHandler())
        return
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    """Run sact. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log, args.log_level)

    try:
        services = Services.create(zone=args.zone, resource_type=args.resource_type)
    except ConfigError as e:
        logger.error(f"Startup failed: {e}")
        print(f"Error: {e.message}", file=sys.stderr)
        if e.suggestion:
            print(f"  {e.suggestion}", file=sys.stderr)
        return 1

    result = SactApp(services).run()
    logger.info("Exiting")
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
