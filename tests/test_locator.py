"""Tests for ManifestLocator cache lookups."""

from nuget_metadata._resolution.locator import ManifestLocator


class TestManifestPath:
    """Test the expected cache layout."""

    def test_path_uses_lowercase_name(self, tmp_path):
        """Test that both the directory and file name are lowercased."""
        path = ManifestLocator.manifest_path(tmp_path, "Newtonsoft.Json", "13.0.1")
        assert path == tmp_path / "newtonsoft.json" / "13.0.1" / "newtonsoft.json.nuspec"

    def test_version_case_preserved(self, tmp_path):
        """Test that the version segment is used verbatim."""
        path = ManifestLocator.manifest_path(tmp_path, "Pkg", "1.0.0-Beta")
        assert path.parent.name == "1.0.0-Beta"


class TestLocate:
    """Test locate() across cache roots."""

    def test_finds_manifest_in_single_root(self, tmp_path, write_cached_manifest):
        """Test that a cached manifest is found."""
        expected = write_cached_manifest(tmp_path, "Serilog", "3.1.1", b"<package/>")
        locator = ManifestLocator([tmp_path])

        assert locator.locate("Serilog", "3.1.1") == expected

    def test_lookup_is_case_insensitive_on_name(self, tmp_path, write_cached_manifest):
        """Test that a mixed-case name finds the lowercase cache entry."""
        expected = write_cached_manifest(tmp_path, "serilog", "3.1.1", b"<package/>")
        locator = ManifestLocator([tmp_path])

        assert locator.locate("SeriLog", "3.1.1") == expected

    def test_first_matching_root_wins(self, tmp_path, write_cached_manifest):
        """Test that roots are searched in order and the first match returned."""
        root_a = tmp_path / "a"
        root_b = tmp_path / "b"
        root_a.mkdir()
        path_a = write_cached_manifest(root_a, "Polly", "8.2.0", b"<package/>")
        write_cached_manifest(root_b, "Polly", "8.2.0", b"<package/>")
        locator = ManifestLocator([root_a, root_b])

        assert locator.locate("Polly", "8.2.0") == path_a

    def test_later_root_used_when_earlier_misses(self, tmp_path, write_cached_manifest):
        """Test that a manifest only under the second root is found there."""
        root_a = tmp_path / "a"
        root_b = tmp_path / "b"
        root_a.mkdir()
        path_b = write_cached_manifest(root_b, "Polly", "8.2.0", b"<package/>")
        locator = ManifestLocator([root_a, root_b])

        assert locator.locate("Polly", "8.2.0") == path_b

    def test_missing_manifest_returns_none(self, tmp_path):
        """Test that no match yields None."""
        locator = ManifestLocator([tmp_path, tmp_path / "does-not-exist"])
        assert locator.locate("Polly", "8.2.0") is None

    def test_other_version_not_matched(self, tmp_path, write_cached_manifest):
        """Test that a different cached version is not returned."""
        write_cached_manifest(tmp_path, "Polly", "8.1.0", b"<package/>")
        locator = ManifestLocator([tmp_path])

        assert locator.locate("Polly", "8.2.0") is None

    def test_empty_name_or_version_returns_none(self, tmp_path, write_cached_manifest):
        """Test that an incomplete identity never matches."""
        write_cached_manifest(tmp_path, "Polly", "8.2.0", b"<package/>")
        locator = ManifestLocator([tmp_path])

        assert locator.locate("", "8.2.0") is None
        assert locator.locate("Polly", "") is None

    def test_no_roots(self):
        """Test that a locator without roots finds nothing."""
        assert ManifestLocator([]).locate("Polly", "8.2.0") is None

    def test_accepts_string_roots(self, tmp_path, write_cached_manifest):
        """Test that roots may be given as strings."""
        expected = write_cached_manifest(tmp_path, "Polly", "8.2.0", b"<package/>")
        locator = ManifestLocator([str(tmp_path)])

        assert locator.cache_roots == (tmp_path,)
        assert locator.locate("Polly", "8.2.0") == expected
