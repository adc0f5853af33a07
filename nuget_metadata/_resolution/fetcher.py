"""Fetch .nuspec manifests from a NuGet flat-container registry."""

import io
from typing import BinaryIO, Optional

import requests

from nuget_metadata.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from nuget_metadata.logging_config import logger

from .locator import MANIFEST_EXTENSION

# application/xml on nuget.org, text/xml on some mirrors
XML_MEDIA_TYPES = {"application/xml", "text/xml"}


def _is_xml_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in XML_MEDIA_TYPES or media_type.endswith("+xml")


class ManifestFetcher:
    """
    Retrieves a package manifest over HTTP when no cached copy exists.

    A single GET is issued per call. Anything other than a 200 response
    with an XML content type is reported as absence, never raised.
    """

    def __init__(
        self,
        session: requests.Session,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session
        self._base_url = base_url if base_url is not None else DEFAULT_BASE_URL
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def manifest_url(self, name: str, version: str) -> str:
        """Registry address of a manifest; the package id keeps its original case."""
        return f"{self._base_url}{name}/{version}/{name}{MANIFEST_EXTENSION}"

    def fetch(self, name: str, version: str) -> Optional[BinaryIO]:
        """
        Download a manifest.

        Args:
            name: Package id, used verbatim in the URL
            version: Package version

        Returns:
            Binary stream over the manifest content, or None if unavailable
        """
        if not name or not version:
            return None

        url = self.manifest_url(name, version)
        try:
            logger.debug(f"Fetching NuGet manifest: {url}")
            response = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout fetching NuGet manifest for {name} {version}")
            return None
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error fetching NuGet manifest for {name} {version}: {e}")
            return None

        if response.status_code == 404:
            logger.debug(f"Package not found in registry: {name} {version}")
            return None
        if response.status_code != 200:
            logger.warning(f"Failed to fetch NuGet manifest for {name} {version}: HTTP {response.status_code}")
            return None

        content_type = response.headers.get("Content-Type")
        if not _is_xml_content_type(content_type):
            logger.warning(f"Unexpected content type '{content_type}' for NuGet manifest {name} {version}")
            return None

        return io.BytesIO(response.content)
