"""GitHub license API lookup for license files hosted on GitHub."""

import json
import re
from typing import Optional, Tuple

import requests

from nuget_metadata.config import DEFAULT_TIMEOUT
from nuget_metadata.http_client import get_default_headers
from nuget_metadata.logging_config import logger

from ..models import License

GITHUB_API_BASE = "https://api.github.com"

# github.com/{owner}/{repo}/blob/{ref}/{path} and the raw variants
GITHUB_FILE_PATTERNS = (
    re.compile(r"^https?://(?:www\.)?github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+)/(?:blob|raw)/(?P<ref>[^/]+)/(?P<path>.+)$"),
    re.compile(r"^https?://raw\.githubusercontent\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+)/(?P<ref>[^/]+)/(?P<path>.+)$"),
)

# GitHub reports licenses it cannot classify with these ids
UNCLASSIFIED_SPDX_IDS = {"NOASSERTION", "OTHER"}


def parse_github_license_url(url: str) -> Optional[Tuple[str, str, str, str]]:
    """
    Split a GitHub file URL into its parts.

    Args:
        url: URL of a license file on github.com or raw.githubusercontent.com

    Returns:
        Tuple of (owner, repo, ref, path), or None if the URL is not a GitHub file URL
    """
    if not url:
        return None
    for pattern in GITHUB_FILE_PATTERNS:
        match = pattern.match(url.strip())
        if match:
            path = match.group("path").split("?", 1)[0].split("#", 1)[0]
            return match.group("owner"), match.group("repo"), match.group("ref"), path
    return None


class GitHubLicenseLookup:
    """
    Lookup backed by the GitHub repository license API.

    For a license URL pointing at a file in a GitHub repository, asks
    ``GET /repos/{owner}/{repo}/license?ref={ref}`` which license GitHub
    detected. The answer is used only when the detected license file is
    the one the URL points at.
    """

    def __init__(
        self,
        session: requests.Session,
        token: Optional[str] = None,
        api_base_url: str = GITHUB_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session
        self._token = token
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "github.com"

    @property
    def priority(self) -> int:
        return 50

    def resolve_license_from_url(self, url: str) -> Optional[License]:
        parts = parse_github_license_url(url)
        if parts is None:
            return None
        owner, repo, ref, path = parts

        api_url = f"{self._api_base_url}/repos/{owner}/{repo}/license"
        headers = get_default_headers(token=self._token)
        headers["Accept"] = "application/vnd.github+json"

        try:
            logger.debug(f"Querying GitHub license API for {owner}/{repo}@{ref}")
            response = self._session.get(api_url, params={"ref": ref}, headers=headers, timeout=self._timeout)
            if response.status_code == 404:
                logger.debug(f"No license detected by GitHub for {owner}/{repo}@{ref}")
                return None
            if response.status_code != 200:
                logger.warning(f"Failed to query GitHub license for {owner}/{repo}: HTTP {response.status_code}")
                return None
            data = response.json()
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout querying GitHub license for {owner}/{repo}")
            return None
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error querying GitHub license for {owner}/{repo}: {e}")
            return None
        except json.JSONDecodeError as e:
            logger.warning(f"JSON decode error for GitHub license {owner}/{repo}: {e}")
            return None

        detected_path = data.get("path") or ""
        if detected_path.lower() != path.lower():
            logger.debug(f"GitHub detected license in '{detected_path}', not '{path}', for {owner}/{repo}")
            return None

        license_data = data.get("license") or {}
        spdx_id = license_data.get("spdx_id")
        if not spdx_id or spdx_id.upper() in UNCLASSIFIED_SPDX_IDS:
            return None

        return License(id=spdx_id, name=license_data.get("name") or spdx_id, url=url)
