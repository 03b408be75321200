"""
Release lookup: latest published tag of a GitHub project.

Failures are raised, never returned as an empty string, so a missing
release and a dead network are distinguishable:

    ReleaseLookupError.reason == "network"           transport / HTTP error
    ReleaseLookupError.reason == "no_release"        404 or no tag_name
    ReleaseLookupError.reason == "invalid_response"  body is not a JSON object
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass

from ptero_bootstrap import __version__
from ptero_bootstrap.core.errors import ReleaseLookupError
from ptero_bootstrap.core.models.settings import BootstrapSettings

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class ReleaseVersions:
    """Latest tags of the two tracked projects."""

    panel: str
    wings: str

    def to_dict(self) -> dict:
        return {"panel": self.panel, "wings": self.wings}


def get_latest_release(
    project: str,
    *,
    api_base: str = GITHUB_API_URL,
    timeout: int = 30,
) -> str:
    """Return the ``tag_name`` of the latest release of ``project``.

    Args:
        project: ``owner/repo`` path, e.g. ``pterodactyl/panel``.
        api_base: GitHub API root.
        timeout: HTTP timeout in seconds.

    Raises:
        ReleaseLookupError: On any failure (see module docstring).
    """
    url = f"{api_base.rstrip('/')}/repos/{project}/releases/latest"
    req = urllib.request.Request(
        url,
        headers={
            "Accept": "application/vnd.github+json",
            "User-Agent": f"ptero-bootstrap/{__version__}",
        },
    )
    logger.debug("GET %s", url)

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read()
    except urllib.error.HTTPError as exc:
        if exc.code == 404:
            raise ReleaseLookupError(project, "no_release", "HTTP 404") from exc
        raise ReleaseLookupError(project, "network", f"HTTP {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise ReleaseLookupError(project, "network", str(exc)[:200]) from exc

    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ReleaseLookupError(project, "invalid_response", "body is not JSON") from exc
    if not isinstance(data, dict):
        raise ReleaseLookupError(project, "invalid_response", "expected a JSON object")

    tag = data.get("tag_name")
    if not isinstance(tag, str) or not tag:
        raise ReleaseLookupError(project, "no_release", "no tag_name in response")

    logger.info("Latest release of %s is %s", project, tag)
    return tag


def get_latest_versions(settings: BootstrapSettings) -> ReleaseVersions:
    """Resolve the latest panel and wings tags."""
    lookup = {"api_base": settings.github_api_url, "timeout": settings.http_timeout}
    return ReleaseVersions(
        panel=get_latest_release(settings.panel_project, **lookup),
        wings=get_latest_release(settings.wings_project, **lookup),
    )
