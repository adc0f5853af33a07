"""Reader for NuGet .nuspec package manifests.

A nuspec is an XML document whose ``<metadata>`` element carries the
package description fields::

    <package xmlns="http://schemas.microsoft.com/packaging/2013/05/nuspec.xsd">
      <metadata>
        <id>Newtonsoft.Json</id>
        <authors>James Newton-King</authors>
        <license type="expression">MIT</license>
        <licenseUrl>https://licenses.nuget.org/MIT</licenseUrl>
        ...
      </metadata>
    </package>

The schema namespace changed several times across NuGet releases, so
elements are matched on their local name only.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Iterator, Optional, Tuple

from license_expression import (
    ExpressionError,
    Licensing,
    LicenseSymbol,
    LicenseWithExceptionSymbol,
    get_spdx_licensing,
)

from nuget_metadata.exceptions import ManifestParseError

_spdx_licensing = get_spdx_licensing()
# no known symbols, so leaves keep the text the manifest wrote
_verbatim_licensing = Licensing()

LICENSE_TYPE_EXPRESSION = "expression"
LICENSE_TYPE_FILE = "file"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _iter_leaf_keys(node) -> Iterator[str]:
    # WITH clauses contribute their license side only
    if isinstance(node, LicenseWithExceptionSymbol):
        yield node.license_symbol.key
    elif isinstance(node, LicenseSymbol):
        yield node.key
    else:
        for arg in node.args:
            yield from _iter_leaf_keys(arg)


def parse_license_expression(expression: str) -> Tuple[str, ...]:
    """
    Split a license expression into its leaf license identifiers.

    Leaves are returned depth-first, left to right, exactly as written:
    deprecated ids such as ``GPL-2.0`` are not replaced by their current
    SPDX equivalents.

    Args:
        expression: License expression such as ``MIT OR Apache-2.0``

    Returns:
        Tuple of license identifiers, possibly with repeats

    Raises:
        ManifestParseError: If the expression is not syntactically valid
    """
    try:
        _spdx_licensing.parse(expression, validate=False)
        parsed = _verbatim_licensing.parse(expression, validate=False)
    except ExpressionError as e:
        raise ManifestParseError(f"Invalid license expression '{expression}': {e}") from e
    if parsed is None:
        return ()
    return tuple(_iter_leaf_keys(parsed))


@dataclass(frozen=True)
class LicenseMetadata:
    """The ``<license>`` element of a nuspec."""

    type: str
    value: str
    version: Optional[str] = None
    identifiers: Tuple[str, ...] = field(default=())

    @property
    def is_expression(self) -> bool:
        return self.type == LICENSE_TYPE_EXPRESSION and bool(self.identifiers)


class NuspecReader:
    """
    Parses a nuspec stream and exposes its metadata fields.

    The stream is consumed in the constructor, so callers may close it as
    soon as the reader exists. Accessors return ``""`` for missing elements.

    Raises:
        ManifestParseError: On malformed XML, a missing ``<metadata>``
            element or an unparseable license expression
    """

    def __init__(self, stream: BinaryIO) -> None:
        try:
            root = ET.parse(stream).getroot()
        except ET.ParseError as e:
            raise ManifestParseError(f"Malformed nuspec: {e}") from e

        metadata = None
        if _local_name(root.tag) == "package":
            metadata = next((child for child in root if _local_name(child.tag) == "metadata"), None)
        if metadata is None:
            raise ManifestParseError("Nuspec has no <package><metadata> element")

        self._values: Dict[str, str] = {}
        self._license_metadata: Optional[LicenseMetadata] = None
        for element in metadata:
            name = _local_name(element.tag)
            # first occurrence wins, matching NuGet's reader
            if name in self._values:
                continue
            self._values[name] = (element.text or "").strip()
            if name == "license":
                self._license_metadata = self._read_license(element)

    @staticmethod
    def _read_license(element: ET.Element) -> LicenseMetadata:
        license_type = (element.get("type") or "").strip().lower()
        value = (element.text or "").strip()
        identifiers: Tuple[str, ...] = ()
        if license_type == LICENSE_TYPE_EXPRESSION and value:
            identifiers = parse_license_expression(value)
        return LicenseMetadata(
            type=license_type,
            value=value,
            version=element.get("version"),
            identifiers=identifiers,
        )

    def get_metadata_value(self, name: str) -> str:
        return self._values.get(name, "")

    def get_id(self) -> str:
        return self.get_metadata_value("id")

    def get_version(self) -> str:
        return self.get_metadata_value("version")

    def get_authors(self) -> str:
        return self.get_metadata_value("authors")

    def get_copyright(self) -> str:
        return self.get_metadata_value("copyright")

    def get_title(self) -> str:
        return self.get_metadata_value("title")

    def get_summary(self) -> str:
        return self.get_metadata_value("summary")

    def get_description(self) -> str:
        return self.get_metadata_value("description")

    def get_license_metadata(self) -> Optional[LicenseMetadata]:
        return self._license_metadata

    def get_license_url(self) -> str:
        return self.get_metadata_value("licenseUrl")

    def get_project_url(self) -> str:
        return self.get_metadata_value("projectUrl")
