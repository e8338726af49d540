"""config-search - find and categorize project configuration files."""

__version__ = "0.1.0"
__description__ = "A tool for finding and categorizing configuration files in a project tree"

# Import main components for programmatic access
from .core.models import MatchedFile, SearchOptions, FormatOptions, ResultSet
from .core.patterns import CONFIG_PATTERNS, DEFAULT_CATALOG, PatternCatalog
from .core.scanner import ConfigScanner, search_configuration_files
from .core.formatter import format_results

__all__ = [
    "MatchedFile",
    "SearchOptions",
    "FormatOptions",
    "ResultSet",
    "CONFIG_PATTERNS",
    "DEFAULT_CATALOG",
    "PatternCatalog",
    "ConfigScanner",
    "search_configuration_files",
    "format_results"
]
