"""Offline lookup of well-known license URLs.

Older packages declare their license only through ``<licenseUrl>``. Many
of those URLs point at canonical license pages whose license is not in
doubt, so they are mapped here without any network call.

IMPORTANT: Only exact URL matches are mapped. A URL pointing into a
project's own repository says nothing certain about the license and is
left to other lookups or to the URL-only fallback.
"""

import re
from typing import Dict, Optional, Tuple
from urllib.parse import unquote, urlsplit

from license_expression import ExpressionError, LicenseSymbol, get_spdx_licensing

from nuget_metadata.logging_config import logger

from ..models import License

_spdx_licensing = get_spdx_licensing()

NUGET_LICENSES_HOST = "licenses.nuget.org"

# normalized URL (no scheme, no "www.", no trailing slash or extension) -> (SPDX id, name)
KNOWN_LICENSE_URLS: Dict[str, Tuple[str, str]] = {
    # MIT
    "opensource.org/licenses/mit": ("MIT", "MIT License"),
    "opensource.org/licenses/mit-license": ("MIT", "MIT License"),
    "opensource.org/license/mit": ("MIT", "MIT License"),
    "choosealicense.com/licenses/mit": ("MIT", "MIT License"),
    # Apache
    "apache.org/licenses/license-2.0": ("Apache-2.0", "Apache License 2.0"),
    "opensource.org/licenses/apache-2.0": ("Apache-2.0", "Apache License 2.0"),
    "opensource.org/license/apache-2-0": ("Apache-2.0", "Apache License 2.0"),
    "choosealicense.com/licenses/apache-2.0": ("Apache-2.0", "Apache License 2.0"),
    # BSD
    "opensource.org/licenses/bsd-2-clause": ("BSD-2-Clause", 'BSD 2-Clause "Simplified" License'),
    "opensource.org/licenses/bsd-3-clause": ("BSD-3-Clause", 'BSD 3-Clause "New" or "Revised" License'),
    "opensource.org/license/bsd-3-clause": ("BSD-3-Clause", 'BSD 3-Clause "New" or "Revised" License'),
    # Microsoft
    "opensource.org/licenses/ms-pl": ("MS-PL", "Microsoft Public License"),
    "opensource.org/licenses/ms-rl": ("MS-RL", "Microsoft Reciprocal License"),
    # GNU
    "gnu.org/licenses/gpl-2.0": ("GPL-2.0-only", "GNU General Public License v2.0 only"),
    "gnu.org/licenses/gpl-3.0": ("GPL-3.0-only", "GNU General Public License v3.0 only"),
    "gnu.org/licenses/lgpl-2.1": ("LGPL-2.1-only", "GNU Lesser General Public License v2.1 only"),
    "gnu.org/licenses/lgpl-3.0": ("LGPL-3.0-only", "GNU Lesser General Public License v3.0 only"),
    "gnu.org/licenses/agpl-3.0": ("AGPL-3.0-only", "GNU Affero General Public License v3.0"),
    # Others
    "mozilla.org/mpl/2.0": ("MPL-2.0", "Mozilla Public License 2.0"),
    "opensource.org/licenses/isc": ("ISC", "ISC License"),
    "opensource.org/licenses/zlib": ("Zlib", "zlib License"),
    "eclipse.org/legal/epl-2.0": ("EPL-2.0", "Eclipse Public License 2.0"),
    "boost.org/license_1_0": ("BSL-1.0", "Boost Software License 1.0"),
    "unlicense.org": ("Unlicense", "The Unlicense"),
    "creativecommons.org/publicdomain/zero/1.0": ("CC0-1.0", "Creative Commons Zero v1.0 Universal"),
}

_EXTENSION_PATTERN = re.compile(r"\.(html?|txt|php|md)$")


def normalize_license_url(url: str) -> str:
    """
    Reduce a license URL to the form used as a key in KNOWN_LICENSE_URLS.

    Args:
        url: License URL as written in a manifest

    Returns:
        Lowercase host and path without scheme, "www.", query, fragment,
        trailing slash or page extension
    """
    parts = urlsplit(url.strip())
    host = parts.netloc.lower()
    if host.startswith("www."):
        host = host[4:]
    path = parts.path.rstrip("/").lower()
    path = _EXTENSION_PATTERN.sub("", path)
    return f"{host}{path}"


class KnownUrlLicenseLookup:
    """
    Lookup for canonical license pages and licenses.nuget.org links.

    ``https://licenses.nuget.org/{id}`` is what nuget.org writes into
    ``<licenseUrl>`` for packages published with a license expression. A
    single-identifier path maps straight to that identifier; compound
    expressions cannot be represented as one License and are not resolved.
    """

    @property
    def name(self) -> str:
        return "known-urls"

    @property
    def priority(self) -> int:
        # offline, so ahead of any network lookup
        return 10

    def resolve_license_from_url(self, url: str) -> Optional[License]:
        if not url:
            return None

        parts = urlsplit(url.strip())
        if parts.netloc.lower() == NUGET_LICENSES_HOST:
            return self._resolve_nuget_license_url(url, unquote(parts.path.strip("/")))

        known = KNOWN_LICENSE_URLS.get(normalize_license_url(url))
        if known is None:
            return None
        spdx_id, name = known
        return License(id=spdx_id, name=name, url=url)

    def _resolve_nuget_license_url(self, url: str, expression: str) -> Optional[License]:
        if not expression:
            return None
        try:
            parsed = _spdx_licensing.parse(expression, validate=False)
        except ExpressionError:
            logger.debug(f"Unparseable expression in NuGet license URL: {url}")
            return None
        if not isinstance(parsed, LicenseSymbol):
            logger.debug(f"Compound expression in NuGet license URL, not resolving: {url}")
            return None
        if _spdx_licensing.unknown_license_keys(parsed):
            return None
        # the id stays as the link spells it, deprecated forms included
        identifier = expression.strip()
        return License(id=identifier, name=identifier, url=url)
