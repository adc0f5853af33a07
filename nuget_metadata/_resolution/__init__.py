"""NuGet package metadata resolution."""

from .builder import ComponentBuilder, select_description
from .fetcher import ManifestFetcher
from .license_resolver import LicenseResolver
from .locator import ManifestLocator
from .lookups import GitHubLicenseLookup, KnownUrlLicenseLookup, LicenseLookupChain, NullLicenseLookup
from .models import Component, ExternalReference, License, PackageIdentity
from .nuspec import LicenseMetadata, NuspecReader
from .protocol import LicenseLookup
from .resolver import NuGetMetadataResolver, create_default_builder, create_license_lookup

__all__ = [
    "Component",
    "ComponentBuilder",
    "ExternalReference",
    "GitHubLicenseLookup",
    "KnownUrlLicenseLookup",
    "License",
    "LicenseLookup",
    "LicenseLookupChain",
    "LicenseMetadata",
    "LicenseResolver",
    "ManifestFetcher",
    "ManifestLocator",
    "NuGetMetadataResolver",
    "NullLicenseLookup",
    "NuspecReader",
    "PackageIdentity",
    "create_default_builder",
    "create_license_lookup",
    "select_description",
]
