"""Minimal JSON-over-HTTPS client for the Sakura Cloud APIs.

All three backends (IaaS, AppRun Dedicated, Monitoring Suite) accept the
same basic-auth credentials, so one client serves them all.
"""

from __future__ import annotations

import base64
import http.client
import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from ...models.exceptions import FetchError

logger = logging.getLogger(__name__)

API_ROOT = "https://secure.sakura.ad.jp/cloud"

# Global resources and account lookups go through this zone
GLOBAL_ZONE = "is1a"


def iaas_url(zone: str, path: str) -> str:
    return f"{API_ROOT}/zone/{zone}/api/cloud/1.1/{path.lstrip('/')}"


def apprun_url(path: str) -> str:
    return f"{API_ROOT}/api/apprun-dedicated/1.0/{path.lstrip('/')}"


def monitoring_url(path: str) -> str:
    return f"{API_ROOT}/zone/{GLOBAL_ZONE}/api/monitoring/1.0/{path.lstrip('/')}"


class SakuraClient:
    """Blocking GET requests returning decoded JSON.

    Every failure (HTTP status, network, undecodable body) is raised as
    FetchError, so callers have a single exception to handle.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(self, token: str, secret: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._auth = base64.b64encode(f"{token}:{secret}".encode("utf-8")).decode("ascii")
        self.timeout = timeout

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        if params:
            url = f"{url}?{urlencode(params)}"
        request = Request(
            url,
            headers={
                "Authorization": f"Basic {self._auth}",
                "Accept": "application/json",
            },
            method="GET",
        )
        logger.debug(f"GET {url}")
        try:
            with urlopen(request, timeout=self.timeout) as resp:
                body = resp.read().decode("utf-8")
        except HTTPError as e:
            detail = _error_message(e)
            logger.error(f"API error {e.code} for {url}: {detail}")
            raise FetchError(f"api error: {e.code} {detail}".rstrip(), status=e.code) from e
        except URLError as e:
            logger.error(f"Network error for {url}: {e.reason}")
            raise FetchError(
                f"network error: {e.reason}",
                suggestion="check your connection",
            ) from e
        except TimeoutError as e:
            logger.error(f"Request timed out: {url}")
            raise FetchError("api request timed out") from e
        except (OSError, http.client.HTTPException) as e:
            logger.error(f"Connection failed for {url}: {e!r}")
            raise FetchError(
                f"network error: {e!r}",
                suggestion="check your connection",
            ) from e

        try:
            return json.loads(body) if body else {}
        except json.JSONDecodeError as e:
            raise FetchError(f"invalid JSON from api: {e}") from e


def _error_message(error: HTTPError) -> str:
    """Pull the provider's error text out of an HTTP error body, if any."""
    try:
        data = json.loads(error.read().decode("utf-8"))
    except Exception as parse_error:
        logger.debug(f"Failed to parse API error response: {parse_error}")
        return ""
    if isinstance(data, dict):
        for key in ("error_msg", "message", "detail", "error"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value[:200]
    return ""
