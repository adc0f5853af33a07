"""Build normalized Components from NuGet package manifests."""

from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from cyclonedx.model import ExternalReferenceType

from nuget_metadata.logging_config import logger

from .fetcher import ManifestFetcher
from .license_resolver import LicenseResolver
from .locator import ManifestLocator
from .models import Component, ExternalReference, PackageIdentity
from .nuspec import NuspecReader

# Highest priority first; exactly one source supplies the description
DESCRIPTION_FIELDS = ("get_summary", "get_description", "get_title")


def select_description(reader: NuspecReader) -> Optional[str]:
    """Return the first non-empty of summary, description and title."""
    for accessor in DESCRIPTION_FIELDS:
        value = getattr(reader, accessor)()
        if value:
            return value
    return None


class ComponentBuilder:
    """
    Resolves one package identity into a Component.

    The manifest comes from the first local cache that has it, otherwise
    from the registry. A package with no manifest anywhere still yields an
    identity-only Component. Only a malformed manifest raises.

    Example:
        builder = ComponentBuilder(
            locator=ManifestLocator([Path.home() / ".nuget" / "packages"]),
            fetcher=ManifestFetcher(session),
            license_resolver=LicenseResolver(KnownUrlLicenseLookup()),
        )
        component = builder.build(PackageIdentity("Newtonsoft.Json", "13.0.1"))
    """

    def __init__(
        self,
        locator: ManifestLocator,
        fetcher: Optional[ManifestFetcher] = None,
        license_resolver: Optional[LicenseResolver] = None,
    ) -> None:
        self._locator = locator
        self._fetcher = fetcher
        self._license_resolver = license_resolver or LicenseResolver()

    @contextmanager
    def open_manifest(self, identity: PackageIdentity) -> Iterator[Optional[BinaryIO]]:
        """
        Open the manifest for a package, closing it when the block exits.

        Yields:
            Binary stream over the manifest, or None if neither the caches
            nor the registry have one
        """
        stream: Optional[BinaryIO] = None
        cached_path = self._locator.locate(identity.name, identity.version)
        if cached_path is not None:
            try:
                stream = open(cached_path, "rb")
            except OSError as e:
                logger.warning(f"Cannot read cached manifest {cached_path}: {e}")
        if stream is None and self._fetcher is not None:
            stream = self._fetcher.fetch(identity.name, identity.version)

        if stream is None:
            yield None
            return

        with stream:
            yield stream

    def build(self, identity: PackageIdentity) -> Optional[Component]:
        """
        Resolve a package identity into a Component.

        Args:
            identity: Package name, version and scope

        Returns:
            Component, or None if name or version is empty

        Raises:
            ManifestParseError: If the manifest found is malformed
        """
        if not identity.is_valid():
            return None

        logger.info(f"Retrieving {identity.name} {identity.version}")
        component = Component.from_identity(identity)

        with self.open_manifest(identity) as stream:
            if stream is None:
                logger.debug(f"No manifest found for {identity}, returning identity-only component")
                return component
            reader = NuspecReader(stream)

        component.publisher = reader.get_authors() or None
        # empty copyright must not reach the BOM
        component.copyright = reader.get_copyright() or None
        component.description = select_description(reader)

        licenses = self._license_resolver.resolve(reader)
        if licenses:
            component.licenses = licenses

        project_url = reader.get_project_url()
        if project_url:
            component.external_references = [ExternalReference(type=ExternalReferenceType.WEBSITE, url=project_url)]

        return component

    def get_component(self, name: str, version: str, scope: Optional[str] = None) -> Optional[Component]:
        """Convenience wrapper around build() taking the identity fields directly."""
        return self.build(PackageIdentity(name=name, version=version, scope=scope))
