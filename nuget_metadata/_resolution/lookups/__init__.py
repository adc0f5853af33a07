"""License lookup implementations for license-URL resolution."""

from .chain import LicenseLookupChain
from .github import GitHubLicenseLookup
from .known_urls import KnownUrlLicenseLookup
from .null import NullLicenseLookup

__all__ = [
    "GitHubLicenseLookup",
    "KnownUrlLicenseLookup",
    "LicenseLookupChain",
    "NullLicenseLookup",
]
