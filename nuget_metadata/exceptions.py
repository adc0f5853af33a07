"""Custom exceptions for nuget-metadata."""


class NuGetMetadataError(Exception):
    """Base exception for all nuget-metadata operations."""


class ConfigurationError(NuGetMetadataError):
    """Raised when resolver configuration validation fails."""


class ManifestParseError(NuGetMetadataError):
    """Raised when a .nuspec manifest cannot be parsed."""
