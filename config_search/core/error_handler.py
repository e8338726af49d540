"""Error handling utilities for the configuration file search tool."""

import errno
import logging
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import DirectoryAccessError, FileSystemError, PathNotFoundError


class ErrorHandler:
    """Centralized error handling for filesystem access during a search."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            logger: Logger instance to use for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def handle_root_error(self, error: OSError, root: Union[str, Path]) -> FileSystemError:
        """
        Convert an OS error on the search root into the matching fatal error.

        Args:
            error: The exception raised while accessing the root
            root: Resolved search root

        Returns:
            Exception for the caller to raise
        """
        if error.errno == errno.ENOENT:
            return PathNotFoundError(f"Project path does not exist: {root}")
        if error.errno in (errno.EACCES, errno.EPERM):
            return DirectoryAccessError(f"Permission denied reading directory: {root}")
        return FileSystemError(f"Cannot read directory {root}: {error}")

    def handle_directory_error(self, error: OSError, directory: Union[str, Path]) -> str:
        """
        Log a directory that could not be read mid-search.

        The caller skips the directory's subtree and carries on.

        Args:
            error: The exception raised while listing the directory
            directory: Directory that could not be listed

        Returns:
            Warning message describing the skipped directory
        """
        reason = error.strerror or str(error)
        message = f"Could not read directory {directory}: {reason}"
        self.logger.warning(message)
        return message

    def handle_file_error(self, error: OSError, file_path: Union[str, Path]) -> str:
        """Log a file whose type or metadata could not be read."""
        reason = error.strerror or str(error)
        message = f"Could not read file metadata for {file_path}: {reason}"
        self.logger.warning(message)
        return message

    def log_error_summary(self, messages: List[str], operation: str = "operation"):
        """
        Log a summary of the recoverable errors from an operation.

        Args:
            messages: Warning messages collected during the operation
            operation: Description of the operation
        """
        if not messages:
            return

        self.logger.warning(f"{operation} completed with {len(messages)} skipped path(s)")
        for message in messages[:10]:
            self.logger.debug(f"  {message}")
        if len(messages) > 10:
            self.logger.debug(f"  ... and {len(messages) - 10} more")
