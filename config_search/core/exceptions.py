"""Custom exceptions for the configuration file search tool."""


class ConfigSearchError(Exception):
    """Base exception for configuration search errors."""
    pass


class FileSystemError(ConfigSearchError):
    """Exception for file system related errors."""
    pass


class ValidationError(ConfigSearchError):
    """Exception for invalid options or catalog data."""
    pass


class ConfigurationError(ConfigSearchError):
    """Exception for configuration related errors."""
    pass


class PathNotFoundError(FileSystemError):
    """Exception for a search root that does not exist."""
    pass


class DirectoryAccessError(FileSystemError):
    """Exception for a directory that cannot be listed."""
    pass
