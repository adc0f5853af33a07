"""Priority-ordered chain of license lookups."""

from typing import Any, Dict, List, Optional

from nuget_metadata.logging_config import logger

from ..models import License
from ..protocol import LicenseLookup


class LicenseLookupChain:
    """
    Registry of license lookups queried in priority order.

    The first lookup that recognizes a URL wins. A lookup that raises is
    logged and skipped so that one failing service never blocks the rest.

    Example:
        chain = LicenseLookupChain()
        chain.register(KnownUrlLicenseLookup())
        chain.register(GitHubLicenseLookup(session))

        license = chain.resolve_license_from_url("https://opensource.org/licenses/MIT")
    """

    def __init__(self) -> None:
        self._lookups: List[LicenseLookup] = []

    @property
    def name(self) -> str:
        return "chain"

    @property
    def priority(self) -> int:
        return 0

    def register(self, lookup: LicenseLookup) -> None:
        """
        Register a lookup.

        Args:
            lookup: LicenseLookup implementation to register
        """
        self._lookups.append(lookup)
        logger.debug(f"Registered license lookup: {lookup.name} (priority={lookup.priority})")

    def get_lookups(self) -> List[LicenseLookup]:
        """Registered lookups, highest priority first."""
        return sorted(self._lookups, key=lambda lookup: lookup.priority)

    def resolve_license_from_url(self, url: str) -> Optional[License]:
        for lookup in self.get_lookups():
            try:
                resolved = lookup.resolve_license_from_url(url)
            except Exception as e:
                logger.warning(f"Error resolving license URL {url} with {lookup.name}: {e}")
                continue
            if resolved is not None:
                logger.debug(f"Resolved license URL {url} with {lookup.name}")
                return resolved
        return None

    def list_lookups(self) -> List[Dict[str, Any]]:
        """
        List all registered lookups with their priorities.

        Returns:
            List of dicts with 'name' and 'priority' keys
        """
        return [{"name": lookup.name, "priority": lookup.priority} for lookup in self.get_lookups()]

    def clear(self) -> None:
        """Remove all registered lookups."""
        self._lookups.clear()
