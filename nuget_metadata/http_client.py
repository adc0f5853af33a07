"""HTTP client utilities with consistent user agent."""

from typing import Optional

import requests


def get_package_version() -> str:
    """Get the installed package version, or "unknown" when not installed."""
    try:
        from importlib.metadata import version

        return version("nuget-metadata")
    except Exception:
        return "unknown"


USER_AGENT = f"nuget-metadata/{get_package_version()}"


def get_default_headers(token: Optional[str] = None, content_type: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        token: Optional authentication token to include
        content_type: Optional Content-Type header value (e.g., "application/json")

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if content_type:
        headers["Content-Type"] = content_type
    return headers


def create_session() -> requests.Session:
    """Create a requests session carrying the default User-Agent."""
    session = requests.Session()
    session.headers.update(get_default_headers())
    return session
