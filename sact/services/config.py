"""Configuration management for sact.

Single JSON file at ~/.config/sact/config.json:

    {
      "default_zone": "is1a",
      "default_resource_type": "server",
      "page_size": 100,
      "request_timeout": 30,
      "theme": "textual-dark"
    }

Resolution order for the starting zone: --zone flag > default_zone >
usacloud profile zone > tk1b. Missing or unreadable files fall back to
defaults; the browser should start even with a broken config.
"""

import json
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from ..models.resource import DEFAULT_ZONE, ResourceType
from .validation import is_valid_zone

logger = logging.getLogger(__name__)


def _secure_write_json(path: Path, data: dict) -> None:
    """Write JSON to file with restricted permissions (0600)."""
    content = json.dumps(data, indent=2)
    # Write to temp file first, then rename for atomicity
    temp_path = path.with_suffix(".tmp")
    try:
        fd = os.open(str(temp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, content.encode())
        finally:
            os.close(fd)
        temp_path.rename(path)
    except OSError:
        # Fallback: write normally then chmod
        path.write_text(content)
        try:
            path.chmod(stat.S_IRUSR | stat.S_IWUSR)  # 0600
        except OSError as e:
            logger.debug(f"Could not restrict permissions on {path}: {e}")


@dataclass
class Config:
    """User settings stored in ~/.config/sact/config.json."""

    default_zone: str | None = None
    default_resource_type: ResourceType = ResourceType.SERVER
    page_size: int = 100
    request_timeout: float = 30.0
    theme: str | None = None

    def to_dict(self) -> dict:
        result: dict = {
            "default_resource_type": self.default_resource_type.value,
            "page_size": self.page_size,
            "request_timeout": self.request_timeout,
        }
        if self.default_zone is not None:
            result["default_zone"] = self.default_zone
        if self.theme is not None:
            result["theme"] = self.theme
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Build from parsed JSON, replacing invalid values with defaults."""
        zone = data.get("default_zone") or None
        if zone is not None and not is_valid_zone(zone):
            logger.warning(f"Invalid default_zone {zone!r} in config, using {DEFAULT_ZONE}")
            zone = DEFAULT_ZONE

        resource_type = ResourceType.SERVER
        if data.get("default_resource_type"):
            try:
                resource_type = ResourceType.parse(str(data["default_resource_type"]))
            except ValueError:
                logger.warning(f"Invalid default_resource_type {data['default_resource_type']!r} in config")

        return cls(
            default_zone=zone,
            default_resource_type=resource_type,
            page_size=_positive(data.get("page_size"), 100, int),
            request_timeout=_positive(data.get("request_timeout"), 30.0, float),
            theme=data.get("theme"),
        )


def _positive(value, default, kind):
    """Coerce `value` with `kind`, falling back to `default` if not positive."""
    if value is None:
        return default
    try:
        number = kind(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid config value {value!r}")
        return default
    return number if number > 0 else default


class ConfigManager:
    """Loads and saves the sact config file."""

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            config_dir = Path.home() / ".config" / "sact"
        self._config_dir = config_dir
        self._config_file = config_dir / "config.json"
        self._config: Config | None = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> Config:
        """Load config from disk."""
        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text())
                if isinstance(data, dict):
                    return Config.from_dict(data)
                logger.warning(f"Ignoring {self._config_file}: not a JSON object")
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable config {self._config_file}: {e}")
        return Config()

    def save_config(self, config: Config) -> None:
        """Save config to disk with secure permissions."""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        _secure_write_json(self._config_file, config.to_dict())
        self._config = config

    def update_theme(self, theme: str) -> None:
        """Persist the selected theme."""
        config = self.config
        if config.theme == theme:
            return
        config.theme = theme
        self.save_config(config)


def resolve_zone(flag_zone: str | None, config: Config, profile_zone: str | None) -> str:
    """Pick the starting zone: flag > config > profile > default.

    Invalid candidates are skipped with a warning.
    """
    for source, zone in (("--zone", flag_zone), ("config", config.default_zone), ("profile", profile_zone)):
        if not zone:
            continue
        if is_valid_zone(zone):
            logger.info(f"Using zone {zone} from {source}")
            return zone
        logger.warning(f"Invalid zone {zone!r} from {source}, ignoring")
    logger.info(f"No zone configured, using default {DEFAULT_ZONE}")
    return DEFAULT_ZONE
