"""Main resolver wiring the resolution components from configuration."""

from typing import Dict, Iterable, Optional

import requests

from nuget_metadata.config import ResolverConfig
from nuget_metadata.http_client import create_session
from nuget_metadata.logging_config import logger

from .builder import ComponentBuilder
from .fetcher import ManifestFetcher
from .license_resolver import LicenseResolver
from .locator import ManifestLocator
from .lookups import GitHubLicenseLookup, KnownUrlLicenseLookup, LicenseLookupChain
from .models import Component, PackageIdentity


def create_license_lookup(config: ResolverConfig, session: requests.Session) -> LicenseLookupChain:
    """
    Create the license lookup chain enabled by the configuration.

    Lookups in priority order:
    - KnownUrlLicenseLookup (10) - canonical license pages and
      licenses.nuget.org links, no network
    - GitHubLicenseLookup (50) - GitHub license API for license files in
      GitHub repositories

    An empty chain resolves nothing, which leaves license URLs as-is.

    Returns:
        Configured LicenseLookupChain
    """
    chain = LicenseLookupChain()
    if config.known_url_lookup:
        chain.register(KnownUrlLicenseLookup())
    if config.github_lookup:
        chain.register(GitHubLicenseLookup(session, token=config.github_token, timeout=config.timeout))
    return chain


def create_default_builder(config: ResolverConfig, session: requests.Session) -> ComponentBuilder:
    """Create a ComponentBuilder with collaborators built from the configuration."""
    return ComponentBuilder(
        locator=ManifestLocator(config.cache_roots),
        fetcher=ManifestFetcher(session, base_url=config.base_url, timeout=config.timeout),
        license_resolver=LicenseResolver(create_license_lookup(config, session)),
    )


class NuGetMetadataResolver:
    """
    Entry point for resolving NuGet packages into Components.

    Owns the HTTP session shared by the registry fetcher and the license
    lookups. Configuration is fixed at construction, so one resolver may
    serve concurrent calls.

    Example:
        with NuGetMetadataResolver() as resolver:
            component = resolver.get_component("Newtonsoft.Json", "13.0.1")

            components = resolver.get_components([
                PackageIdentity("Serilog", "3.1.1"),
                PackageIdentity("Polly", "8.2.0", scope="required"),
            ])
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        session: Optional[requests.Session] = None,
        builder: Optional[ComponentBuilder] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            config: Optional ResolverConfig. Defaults to ResolverConfig().
            session: Optional requests.Session. If not provided, one is
                     created and closed with the resolver.
            builder: Optional ComponentBuilder overriding the default wiring.
        """
        self._config = config or ResolverConfig()
        self._config.validate()
        self._owns_session = session is None
        self._session = session or create_session()
        self._builder = builder or create_default_builder(self._config, self._session)

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def builder(self) -> ComponentBuilder:
        return self._builder

    def close(self) -> None:
        """Close the requests session if this resolver created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "NuGetMetadataResolver":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def get_component(self, name: str, version: str, scope: Optional[str] = None) -> Optional[Component]:
        """
        Resolve a single package.

        Returns:
            Component, or None if name or version is empty

        Raises:
            ManifestParseError: If the package manifest is malformed
        """
        return self._builder.get_component(name, version, scope)

    def get_components(self, identities: Iterable[PackageIdentity]) -> Dict[PackageIdentity, Optional[Component]]:
        """
        Resolve several packages.

        A malformed manifest is logged and maps to None so that one broken
        package does not abort the batch.

        Args:
            identities: Packages to resolve

        Returns:
            Dictionary mapping each identity to its Component (or None)
        """
        results: Dict[PackageIdentity, Optional[Component]] = {}
        for identity in identities:
            try:
                results[identity] = self._builder.build(identity)
            except Exception as e:
                logger.error(f"Unexpected error resolving {identity}: {e}")
                results[identity] = None
        return results

    def get_resolution_stats(self, components: Dict[PackageIdentity, Optional[Component]]) -> Dict[str, int]:
        """
        Calculate resolution statistics from get_components() output.

        Returns:
            Dictionary with counts per resolved field
        """
        stats = {
            "total": len(components),
            "resolved": 0,
            "publishers": 0,
            "descriptions": 0,
            "licenses": 0,
            "websites": 0,
        }

        for component in components.values():
            if component and component.has_metadata():
                stats["resolved"] += 1
                if component.publisher:
                    stats["publishers"] += 1
                if component.description:
                    stats["descriptions"] += 1
                if component.licenses:
                    stats["licenses"] += 1
                if component.external_references:
                    stats["websites"] += 1

        return stats
