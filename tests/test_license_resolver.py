"""Tests for the tiered LicenseResolver."""

import io
from unittest.mock import Mock

from nuget_metadata._resolution.license_resolver import LicenseResolver
from nuget_metadata._resolution.lookups import NullLicenseLookup
from nuget_metadata._resolution.models import License
from nuget_metadata._resolution.nuspec import NuspecReader


def _reader(content: bytes) -> NuspecReader:
    return NuspecReader(io.BytesIO(content))


class TestExpressionTier:
    """Test licenses taken from license expressions."""

    def test_single_expression(self, make_nuspec):
        """Test that one identifier yields one License with id and name."""
        licenses = LicenseResolver().resolve(_reader(make_nuspec(license_expression="MIT")))
        assert licenses == [License(id="MIT", name="MIT")]

    def test_multiple_leaves_in_order(self, make_nuspec):
        """Test that every leaf yields a License, in expression order."""
        licenses = LicenseResolver().resolve(_reader(make_nuspec(license_expression="MIT OR Apache-2.0")))
        assert licenses == [License(id="MIT", name="MIT"), License(id="Apache-2.0", name="Apache-2.0")]

    def test_expression_wins_over_url(self, make_nuspec):
        """Test that the license URL is ignored when an expression exists."""
        lookup = Mock()
        reader = _reader(
            make_nuspec(license_expression="MIT", licenseUrl="https://github.com/acme/lib/blob/main/LICENSE")
        )

        licenses = LicenseResolver(lookup).resolve(reader)

        assert licenses == [License(id="MIT", name="MIT")]
        lookup.resolve_license_from_url.assert_not_called()


class TestLicenseUrlTier:
    """Test licenses taken from license URLs."""

    def test_lookup_result_used_verbatim(self, make_nuspec):
        """Test that a resolved License is returned as-is."""
        resolved = License(id="BSD-3-Clause", name="BSD 3-Clause License", url="https://example.com/LICENSE")
        lookup = Mock()
        lookup.resolve_license_from_url.return_value = resolved

        licenses = LicenseResolver(lookup).resolve(_reader(make_nuspec(licenseUrl="https://example.com/LICENSE")))

        assert licenses == [resolved]
        lookup.resolve_license_from_url.assert_called_once_with("https://example.com/LICENSE")

    def test_lookup_miss_falls_back_to_url(self, make_nuspec):
        """Test that an unrecognized URL yields a URL-only License."""
        lookup = Mock()
        lookup.resolve_license_from_url.return_value = None

        licenses = LicenseResolver(lookup).resolve(_reader(make_nuspec(licenseUrl="https://example.com/LICENSE")))

        assert licenses == [License(url="https://example.com/LICENSE")]
        assert licenses[0].id is None
        assert licenses[0].name is None

    def test_no_lookup_falls_back_to_url(self, make_nuspec):
        """Test that a resolver without lookup behaves like a failed lookup."""
        resolver = LicenseResolver()

        licenses = resolver.resolve(_reader(make_nuspec(licenseUrl="https://example.com/LICENSE")))

        assert isinstance(resolver.lookup, NullLicenseLookup)
        assert licenses == [License(url="https://example.com/LICENSE")]

    def test_lookup_error_falls_back_to_url(self, make_nuspec):
        """Test that a raising lookup never fails resolution."""
        lookup = Mock()
        lookup.name = "broken"
        lookup.resolve_license_from_url.side_effect = RuntimeError("service down")

        licenses = LicenseResolver(lookup).resolve(_reader(make_nuspec(licenseUrl="https://example.com/LICENSE")))

        assert licenses == [License(url="https://example.com/LICENSE")]

    def test_file_license_uses_url_tier(self, make_nuspec):
        """Test that a license file reference does not count as an expression."""
        reader = _reader(
            make_nuspec(
                license_expression="LICENSE.txt",
                license_type="file",
                licenseUrl="https://aka.ms/deprecateLicenseUrl",
            )
        )

        licenses = LicenseResolver().resolve(reader)

        assert licenses == [License(url="https://aka.ms/deprecateLicenseUrl")]


class TestNoLicense:
    """Test manifests without license information."""

    def test_empty_result(self, make_nuspec):
        """Test that no expression and no URL yields no licenses."""
        assert LicenseResolver().resolve(_reader(make_nuspec(authors="Someone"))) == []

    def test_lookup_not_consulted(self, make_nuspec):
        """Test that the lookup is not called without a URL."""
        lookup = Mock()
        LicenseResolver(lookup).resolve(_reader(make_nuspec()))
        lookup.resolve_license_from_url.assert_not_called()
