"""Core engine for configuration file search."""

from .models import MatchedFile, SearchOptions, FormatOptions, Summary, ResultSet
from .patterns import CONFIG_PATTERNS, DEFAULT_CATALOG, PatternCatalog
from .matcher import ConfigMatcher
from .aggregator import ResultAggregator
from .scanner import ConfigScanner, search_configuration_files
from .formatter import format_results

__all__ = [
    "MatchedFile",
    "SearchOptions",
    "FormatOptions",
    "Summary",
    "ResultSet",
    "CONFIG_PATTERNS",
    "DEFAULT_CATALOG",
    "PatternCatalog",
    "ConfigMatcher",
    "ResultAggregator",
    "ConfigScanner",
    "search_configuration_files",
    "format_results"
]
