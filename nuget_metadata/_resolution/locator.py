"""Locate .nuspec manifests in local NuGet package caches."""

from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from nuget_metadata.logging_config import logger

MANIFEST_EXTENSION = ".nuspec"


class ManifestLocator:
    """
    Finds a cached manifest across an ordered list of cache roots.

    NuGet lays its global packages folder out case-insensitively:
    ``{root}/{lowercase name}/{version}/{lowercase name}.nuspec``.
    The first root containing the manifest wins.
    """

    def __init__(self, cache_roots: Iterable[Union[str, Path]]) -> None:
        self._cache_roots: Tuple[Path, ...] = tuple(Path(root) for root in cache_roots)

    @property
    def cache_roots(self) -> Tuple[Path, ...]:
        return self._cache_roots

    @staticmethod
    def manifest_path(cache_root: Union[str, Path], name: str, version: str) -> Path:
        """Expected manifest location for a package under one cache root."""
        lower_name = name.lower()
        return Path(cache_root) / lower_name / version / f"{lower_name}{MANIFEST_EXTENSION}"

    def locate(self, name: str, version: str) -> Optional[Path]:
        """
        Return the path of the first cached manifest for a package.

        Args:
            name: Package id as supplied by the caller
            version: Package version

        Returns:
            Path to the .nuspec file, or None if no cache root has it
        """
        if not name or not version:
            return None

        for cache_root in self._cache_roots:
            candidate = self.manifest_path(cache_root, name, version)
            if candidate.is_file():
                logger.debug(f"Found cached manifest for {name} {version}: {candidate}")
                return candidate

        return None
