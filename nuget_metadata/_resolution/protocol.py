"""LicenseLookup protocol for license-URL resolution plugins."""

from typing import Optional, Protocol

from .models import License


class LicenseLookup(Protocol):
    """
    Protocol defining the interface for license lookup plugins.

    A lookup turns a license URL found in a manifest (``<licenseUrl>``)
    into a License with a canonical identifier and name. Lookups are
    optional collaborators: returning None means "unknown here" and the
    caller falls back to a URL-only license.

    Example:
        class GitHubLicenseLookup:
            name = "github.com"
            priority = 50

            def resolve_license_from_url(self, url: str) -> Optional[License]:
                # Ask the GitHub license API which license the file holds
                ...
    """

    @property
    def name(self) -> str:
        """
        Human-readable name of this lookup.

        Used for logging which lookup resolved a license URL.
        """
        ...

    @property
    def priority(self) -> int:
        """
        Priority of this lookup (lower = tried first).

        Offline lookups should come before ones that make network calls.
        """
        ...

    def resolve_license_from_url(self, url: str) -> Optional[License]:
        """
        Resolve a license URL to a License.

        Implementations should handle their own transport errors and
        return None rather than raise.

        Args:
            url: License URL exactly as declared in the manifest

        Returns:
            License if the URL was recognized, None otherwise
        """
        ...
