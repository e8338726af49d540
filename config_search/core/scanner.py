"""Directory traversal for the configuration file search tool."""

import os
import time
import logging
from pathlib import Path
from collections.abc import Mapping
from typing import Iterator, List, Optional, Tuple, Union

from .aggregator import ResultAggregator
from .error_handler import ErrorHandler
from .exceptions import FileSystemError, PathNotFoundError, ValidationError
from .matcher import ConfigMatcher
from .models import MatchedFile, ResultSet, SearchOptions
from .patterns import PatternCatalog


class ConfigScanner:
    """Walks a directory tree and collects configuration files."""

    def __init__(self, catalog: Optional[PatternCatalog] = None):
        """
        Initialize the scanner.

        Args:
            catalog: Pattern catalog to classify files with. Defaults to the
                     built-in catalog.
        """
        self.matcher = ConfigMatcher(catalog)
        self.catalog = self.matcher.catalog
        self.error_handler = ErrorHandler()
        self.logger = logging.getLogger(__name__)

    def search(self, root_path: Union[str, Path], options: Optional[SearchOptions] = None) -> ResultSet:
        """
        Search a directory tree for configuration files.

        Args:
            root_path: Directory to search
            options: Search options, defaults used if None

        Returns:
            ResultSet with every matched file

        Raises:
            PathNotFoundError: If the root does not exist
            FileSystemError: If the root is not a directory or cannot be read
        """
        options = options or SearchOptions()
        start_time = time.perf_counter()

        root = self._validate_root(root_path)
        aggregator = ResultAggregator(self.catalog, group_by_category=options.group_by_category)

        try:
            root_entries = self._list_directory(root)
        except OSError as e:
            raise self.error_handler.handle_root_error(e, root) from e

        self.logger.info(
            f"Searching {root} (recursive={options.recursive}, max_depth={options.max_depth}, "
            f"exclude={list(options.exclude_paths)})"
        )

        # Each frame holds a directory's remaining entries, its relative path and its depth.
        # Descending on the spot keeps pre-order: parent entries, then each subtree as it is reached.
        stack: List[Tuple[Iterator[os.DirEntry], str, int]] = [(iter(root_entries), "", 0)]

        while stack:
            entries, prefix, depth = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue

            relative_path = f"{prefix}/{entry.name}" if prefix else entry.name
            if options.is_excluded(relative_path):
                self.logger.debug(f"Excluded: {relative_path}")
                continue

            try:
                is_file = entry.is_file(follow_symlinks=False)
                is_dir = not is_file and entry.is_dir(follow_symlinks=False)
            except OSError as e:
                aggregator.add_warning(self.error_handler.handle_file_error(e, entry.path))
                continue

            if is_file:
                self._process_file(entry, relative_path, aggregator)

            elif is_dir and options.recursive:
                child_depth = depth + 1
                if child_depth > options.max_depth:
                    continue
                try:
                    children = self._list_directory(entry.path)
                except OSError as e:
                    aggregator.add_warning(self.error_handler.handle_directory_error(e, entry.path))
                    continue
                stack.append((iter(children), relative_path, child_depth))

        duration = time.perf_counter() - start_time
        result = aggregator.finalize(str(root), duration)

        self.error_handler.log_error_summary(list(result.warnings), "Search")
        self.logger.info(f"Found {result.summary.total} configuration file(s) in {duration:.3f}s")
        return result

    def _process_file(self, entry: os.DirEntry, relative_path: str, aggregator: ResultAggregator):
        """Classify a file and record it if it is a configuration file."""
        category = self.matcher.classify(entry.name, relative_path)
        if category is None:
            return

        try:
            matched = MatchedFile.create(Path(entry.path), relative_path, category)
        except OSError as e:
            # File vanished or became unreadable between listing and stat
            aggregator.add_warning(self.error_handler.handle_file_error(e, entry.path))
            return

        self.logger.debug(f"Matched {relative_path} -> {category}")
        aggregator.record(matched)

    def _list_directory(self, directory: Union[str, Path]) -> List[os.DirEntry]:
        """List a directory, sorted by name. The handle is closed before returning."""
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)

    def _validate_root(self, root_path: Union[str, Path]) -> Path:
        """
        Resolve the search root and check that it is a directory.

        Args:
            root_path: Path to validate

        Returns:
            Resolved absolute path

        Raises:
            PathNotFoundError: If path doesn't exist
            FileSystemError: If path is not a directory
        """
        root = Path(root_path).expanduser().resolve()

        if not root.exists():
            raise PathNotFoundError(f"Project path does not exist: {root}")

        if not root.is_dir():
            raise FileSystemError(f"Project path is not a directory: {root}")

        return root


def search_configuration_files(
    path: Union[str, Path] = ".",
    options: Union[SearchOptions, Mapping, None] = None,
    catalog: Optional[PatternCatalog] = None,
) -> ResultSet:
    """
    Search a project directory for configuration files.

    Args:
        path: Directory to search, defaults to the current directory
        options: SearchOptions, or a mapping of overrides applied on top of the
                 default options
        catalog: Pattern catalog to use instead of the built-in one

    Returns:
        ResultSet for the search

    Raises:
        PathNotFoundError: If the resolved path does not exist
        ValidationError: If the options are invalid
    """
    if options is None:
        options = SearchOptions()
    elif isinstance(options, Mapping):
        options = SearchOptions().with_overrides(**options)
    elif not isinstance(options, SearchOptions):
        raise ValidationError(f"options must be SearchOptions or a mapping, got {type(options).__name__}")

    return ConfigScanner(catalog).search(path, options)
