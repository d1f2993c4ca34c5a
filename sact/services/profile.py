"""Sakura Cloud credentials from usacloud profiles.

Layout shared with the usacloud CLI:

    ~/.usacloud/current               name of the active profile
    ~/.usacloud/<profile>/config.json {"AccessToken", "AccessTokenSecret", "Zone", ...}

Environment variables take precedence over the profile:
SAKURACLOUD_PROFILE selects the profile, SAKURACLOUD_ACCESS_TOKEN,
SAKURACLOUD_ACCESS_TOKEN_SECRET and SAKURACLOUD_ZONE override its values.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from ..models.exceptions import CredentialsError

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"

SETUP_HINT = (
    "run 'usacloud config' to set up a profile, or set "
    "SAKURACLOUD_ACCESS_TOKEN and SAKURACLOUD_ACCESS_TOKEN_SECRET"
)


@dataclass
class UserProfile:
    """Credentials and defaults of one usacloud profile."""

    name: str = DEFAULT_PROFILE
    access_token: str = ""
    access_token_secret: str = ""
    zone: str | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_token and self.access_token_secret)

    def to_dict(self) -> dict:
        result: dict = {
            "AccessToken": self.access_token,
            "AccessTokenSecret": self.access_token_secret,
        }
        if self.zone:
            result["Zone"] = self.zone
        return result

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "UserProfile":
        return cls(
            name=name,
            access_token=data.get("AccessToken") or "",
            access_token_secret=data.get("AccessTokenSecret") or "",
            zone=data.get("Zone") or None,
        )


class ProfileManager:
    """Reads usacloud profiles stored under ~/.usacloud."""

    def __init__(self, profile_dir: Path | None = None, environ: Mapping[str, str] | None = None):
        if profile_dir is None:
            profile_dir = Path.home() / ".usacloud"
        self._profile_dir = profile_dir
        self._environ = os.environ if environ is None else environ
        self._profile: UserProfile | None = None

    @property
    def profile(self) -> UserProfile:
        """The active profile with environment overrides applied."""
        if self._profile is None:
            self._profile = self._load_profile()
        return self._profile

    def current_profile_name(self) -> str:
        name = self._environ.get("SAKURACLOUD_PROFILE", "").strip()
        if name:
            return name
        current = self._profile_dir / "current"
        if current.exists():
            try:
                name = current.read_text().strip()
            except OSError as e:
                logger.warning(f"Could not read {current}: {e}")
        return name or DEFAULT_PROFILE

    def _load_profile(self) -> UserProfile:
        """Load the active profile from disk, then apply the environment."""
        name = self.current_profile_name()
        profile = UserProfile(name=name)
        profile_file = self._profile_dir / name / "config.json"
        if profile_file.exists():
            try:
                data = json.loads(profile_file.read_text())
                if isinstance(data, dict):
                    profile = UserProfile.from_dict(name, data)
                    logger.info(f"Loaded usacloud profile {name!r}")
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable profile {profile_file}: {e}")

        env = self._environ
        if env.get("SAKURACLOUD_ACCESS_TOKEN"):
            profile.access_token = env["SAKURACLOUD_ACCESS_TOKEN"]
        if env.get("SAKURACLOUD_ACCESS_TOKEN_SECRET"):
            profile.access_token_secret = env["SAKURACLOUD_ACCESS_TOKEN_SECRET"]
        if env.get("SAKURACLOUD_ZONE"):
            profile.zone = env["SAKURACLOUD_ZONE"]
        return profile

    def require_credentials(self) -> UserProfile:
        """The active profile, which must carry a token and secret.

        Raises:
            CredentialsError: if either is missing
        """
        profile = self.profile
        if not profile.has_credentials:
            raise CredentialsError("credentials not found", suggestion=SETUP_HINT)
        return profile
