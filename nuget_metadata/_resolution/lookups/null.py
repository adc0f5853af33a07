"""No-op license lookup used when URL resolution is disabled."""

from typing import Optional

from ..models import License


class NullLicenseLookup:
    """Lookup that never recognizes a URL."""

    @property
    def name(self) -> str:
        return "none"

    @property
    def priority(self) -> int:
        return 100

    def resolve_license_from_url(self, url: str) -> Optional[License]:
        return None
