"""Resolver configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.nuget.org/v3-flatcontainer/"
DEFAULT_TIMEOUT = 10  # seconds


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def default_cache_roots() -> Tuple[Path, ...]:
    """Return the NuGet global packages folder, honouring NUGET_PACKAGES."""
    global_packages = os.getenv("NUGET_PACKAGES")
    if global_packages:
        return (Path(global_packages),)
    return (Path.home() / ".nuget" / "packages",)


@dataclass(frozen=True)
class ResolverConfig:
    """Read-only settings shared by every resolution call."""

    cache_roots: Tuple[Path, ...] = field(default_factory=default_cache_roots)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    github_token: Optional[str] = None
    github_lookup: bool = True
    known_url_lookup: bool = True

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.base_url:
            raise ConfigurationError("NuGet base URL is not defined")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"NuGet base URL must be an http(s) URL, got '{self.base_url}'")
        if not self.base_url.endswith("/"):
            raise ConfigurationError(f"NuGet base URL must end with '/', got '{self.base_url}'")
        if self.timeout <= 0:
            raise ConfigurationError(f"HTTP timeout must be positive, got {self.timeout}")


def load_config() -> ResolverConfig:
    """
    Load and validate configuration from environment variables.

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    cache_paths = os.getenv("NUGET_CACHE_PATHS")
    if cache_paths:
        cache_roots = tuple(Path(p).expanduser() for p in cache_paths.split(os.pathsep) if p)
    else:
        cache_roots = default_cache_roots()

    timeout_env = os.getenv("NUGET_HTTP_TIMEOUT")
    try:
        timeout = float(timeout_env) if timeout_env else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"NUGET_HTTP_TIMEOUT must be a number, got '{timeout_env}'")

    config = ResolverConfig(
        cache_roots=cache_roots,
        base_url=os.getenv("NUGET_BASE_URL", DEFAULT_BASE_URL),
        timeout=timeout,
        github_token=os.getenv("GITHUB_TOKEN") or None,
        github_lookup=not evaluate_boolean(os.getenv("DISABLE_GITHUB_LICENSE_LOOKUP", "False")),
        known_url_lookup=not evaluate_boolean(os.getenv("DISABLE_KNOWN_URL_LICENSE_LOOKUP", "False")),
    )
    config.validate()
    return config
