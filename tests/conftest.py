"""Pytest configuration and shared fixtures for all tests."""

from pathlib import Path
from typing import Callable, Optional
from unittest.mock import Mock
from xml.sax.saxutils import escape

import pytest
import requests

NUSPEC_NAMESPACE = "http://schemas.microsoft.com/packaging/2013/05/nuspec.xsd"


def _build_nuspec(
    id: str = "Example.Package",
    version: str = "1.0.0",
    license_expression: Optional[str] = None,
    license_type: str = "expression",
    **fields: str,
) -> bytes:
    # fields use nuspec element names: authors, copyright, title, summary, description, licenseUrl, projectUrl
    elements = [f"    <id>{escape(id)}</id>", f"    <version>{escape(version)}</version>"]
    for element, value in fields.items():
        elements.append(f"    <{element}>{escape(value)}</{element}>")
    if license_expression is not None:
        elements.append(f'    <license type="{license_type}">{escape(license_expression)}</license>')
    body = "\n".join(elements)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<package xmlns="{NUSPEC_NAMESPACE}">\n'
        "  <metadata>\n"
        f"{body}\n"
        "  </metadata>\n"
        "</package>\n"
    ).encode("utf-8")


@pytest.fixture
def make_nuspec() -> Callable[..., bytes]:
    """Factory building nuspec documents from element values."""
    return _build_nuspec


@pytest.fixture
def write_cached_manifest() -> Callable[[Path, str, str, bytes], Path]:
    """Write a manifest into a cache root using the NuGet global packages layout."""

    def _write(cache_root: Path, name: str, version: str, content: bytes) -> Path:
        lower_name = name.lower()
        path = cache_root / lower_name / version / f"{lower_name}.nuspec"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _write


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    return Mock(spec=requests.Session)


@pytest.fixture
def xml_response() -> Callable[[bytes], Mock]:
    """Factory for a 200 response carrying XML content."""

    def _response(content: bytes, content_type: str = "application/xml") -> Mock:
        response = Mock()
        response.status_code = 200
        response.headers = {"Content-Type": content_type}
        response.content = content
        return response

    return _response
