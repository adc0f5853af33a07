"""nuget-metadata: resolve NuGet package metadata into SBOM components."""

from ._resolution import (
    Component,
    ComponentBuilder,
    ExternalReference,
    License,
    LicenseResolver,
    ManifestFetcher,
    ManifestLocator,
    NuGetMetadataResolver,
    PackageIdentity,
)
from .config import ResolverConfig, load_config
from .exceptions import ConfigurationError, ManifestParseError, NuGetMetadataError
from .http_client import get_package_version

__version__ = get_package_version()

__all__ = [
    "Component",
    "ComponentBuilder",
    "ConfigurationError",
    "ExternalReference",
    "License",
    "LicenseResolver",
    "ManifestFetcher",
    "ManifestLocator",
    "ManifestParseError",
    "NuGetMetadataError",
    "NuGetMetadataResolver",
    "PackageIdentity",
    "ResolverConfig",
    "load_config",
]
