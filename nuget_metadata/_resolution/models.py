"""Data model for NuGet component resolution."""

from dataclasses import dataclass, field
from typing import List, Optional

from cyclonedx.exception.model import InvalidUriException
from cyclonedx.model import ExternalReference as CdxExternalReference
from cyclonedx.model import ExternalReferenceType, XsUri
from cyclonedx.model.component import Component as CdxComponent
from cyclonedx.model.component import ComponentScope, ComponentType
from cyclonedx.model.license import DisjunctiveLicense
from packageurl import PackageURL

from nuget_metadata.logging_config import logger


@dataclass(frozen=True)
class PackageIdentity:
    """A NuGet package reference as supplied by the caller."""

    name: str
    version: str
    scope: Optional[str] = None

    def is_valid(self) -> bool:
        """Both name and version must be non-empty for resolution to run."""
        return bool(self.name) and bool(self.version)

    @property
    def purl(self) -> str:
        """Package URL, e.g. ``pkg:nuget/Newtonsoft.Json@13.0.1``."""
        return PackageURL(type="nuget", name=self.name, version=self.version).to_string()

    def __str__(self) -> str:
        return f"{self.name} {self.version}"


@dataclass(frozen=True)
class License:
    """
    A single resolved license.

    Expression-derived licenses carry ``id`` and ``name``; URL-derived
    licenses carry at least ``url`` and, when a lookup succeeded, an id/name.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None

    def to_cyclonedx(self) -> DisjunctiveLicense:
        """Convert to a CycloneDX license; CycloneDX requires an id or a name."""
        url = None
        if self.url:
            try:
                url = XsUri(self.url)
            except InvalidUriException:
                logger.debug(f"License URL is not a valid URI, omitting it: {self.url}")
        if self.id:
            return DisjunctiveLicense(id=self.id, url=url)
        return DisjunctiveLicense(name=self.name or self.url, url=url)


@dataclass(frozen=True)
class ExternalReference:
    """A typed link attached to a component."""

    type: ExternalReferenceType
    url: str


@dataclass
class Component:
    """
    Normalized metadata record for one resolved NuGet package.

    ``copyright`` is never the empty string; missing values are ``None``.
    """

    name: str
    version: str
    purl: str
    scope: Optional[str] = None
    type: ComponentType = ComponentType.LIBRARY
    publisher: Optional[str] = None
    copyright: Optional[str] = None
    description: Optional[str] = None
    licenses: List[License] = field(default_factory=list)
    external_references: List[ExternalReference] = field(default_factory=list)

    @classmethod
    def from_identity(cls, identity: PackageIdentity) -> "Component":
        """Create the identity-only record every resolution starts from."""
        return cls(
            name=identity.name,
            version=identity.version,
            scope=identity.scope,
            purl=identity.purl,
            type=ComponentType.LIBRARY,
        )

    def has_metadata(self) -> bool:
        """Check if anything beyond the package identity was resolved."""
        return bool(
            self.publisher or self.copyright or self.description or self.licenses or self.external_references
        )

    def to_cyclonedx(self) -> CdxComponent:
        """
        Convert to a cyclonedx-python-lib Component.

        The scope is carried over only when it names a CycloneDX scope
        (required, optional, excluded).

        Returns:
            CycloneDX Component ready to be added to a Bom
        """
        scope = None
        if self.scope:
            try:
                scope = ComponentScope(self.scope.lower())
            except ValueError:
                logger.debug(f"Scope '{self.scope}' is not a CycloneDX scope, dropping it for {self.name}")

        external_references = []
        for ref in self.external_references:
            try:
                external_references.append(CdxExternalReference(type=ref.type, url=XsUri(ref.url)))
            except InvalidUriException as e:
                logger.warning(f"Skipping invalid external reference URL '{ref.url}' for {self.name}: {e}")

        return CdxComponent(
            type=self.type,
            name=self.name,
            version=self.version,
            purl=PackageURL.from_string(self.purl),
            scope=scope,
            publisher=self.publisher,
            copyright=self.copyright,
            description=self.description,
            licenses=[lic.to_cyclonedx() for lic in self.licenses],
            external_references=external_references,
        )
