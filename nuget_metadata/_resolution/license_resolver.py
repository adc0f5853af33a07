"""Tiered license resolution for nuspec manifests."""

from typing import Callable, List, Optional

from nuget_metadata.logging_config import logger

from .lookups.null import NullLicenseLookup
from .models import License
from .nuspec import NuspecReader
from .protocol import LicenseLookup


class LicenseResolver:
    """
    Resolves the licenses of a package from its manifest.

    Tiers are tried in order and the first one producing licenses wins:

    1. ``<license type="expression">``: one License per leaf identifier,
       in expression order. ``<licenseUrl>`` is ignored.
    2. ``<licenseUrl>``: the lookup's License if it recognizes the URL,
       otherwise a License carrying only the URL.
    3. Neither: no licenses.
    """

    def __init__(self, lookup: Optional[LicenseLookup] = None) -> None:
        self._lookup: LicenseLookup = lookup if lookup is not None else NullLicenseLookup()
        self._tiers: List[Callable[[NuspecReader], List[License]]] = [
            self.from_expression,
            self.from_license_url,
        ]

    @property
    def lookup(self) -> LicenseLookup:
        return self._lookup

    def resolve(self, reader: NuspecReader) -> List[License]:
        """
        Resolve licenses for a parsed manifest.

        Args:
            reader: Parsed nuspec

        Returns:
            Licenses in resolution order, empty if the manifest declares none
        """
        for tier in self._tiers:
            licenses = tier(reader)
            if licenses:
                return licenses
        return []

    def from_expression(self, reader: NuspecReader) -> List[License]:
        metadata = reader.get_license_metadata()
        if metadata is None or not metadata.is_expression:
            return []
        return [License(id=identifier, name=identifier) for identifier in metadata.identifiers]

    def from_license_url(self, reader: NuspecReader) -> List[License]:
        license_url = reader.get_license_url()
        if not license_url:
            return []

        resolved = None
        try:
            resolved = self._lookup.resolve_license_from_url(license_url)
        except Exception as e:
            logger.warning(f"License lookup {self._lookup.name} failed for {license_url}: {e}")

        if resolved is None:
            resolved = License(url=license_url)
        return [resolved]
