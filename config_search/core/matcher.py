"""Filename classification against the pattern catalog."""

import re
from typing import List, Optional, Pattern, Tuple, Union

from .patterns import DEFAULT_CATALOG, PatternCatalog


WILDCARD = "*"


def is_wildcard(pattern: str) -> bool:
    """Return True if the pattern contains a ``*`` wildcard."""
    return WILDCARD in pattern


def wildcard_to_regex(pattern: str) -> Pattern:
    """
    Translate a ``*`` glob into a compiled regular expression.

    Only ``*`` is special: it becomes ``.*`` and so also spans path
    separators. Everything else is matched literally. The expression is
    meant to be used with ``search()``, so it is not anchored and a match
    anywhere in the relative path counts.

    Args:
        pattern: Glob containing one or more ``*``

    Returns:
        Compiled regular expression
    """
    return re.compile(".*".join(re.escape(part) for part in pattern.split(WILDCARD)))


class ConfigMatcher:
    """Determines the category a file belongs to."""

    def __init__(self, catalog: Optional[PatternCatalog] = None):
        """
        Initialize the matcher.

        Args:
            catalog: Pattern catalog to classify against. Defaults to the
                     built-in catalog.
        """
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self._rules: List[Tuple[str, Union[str, Pattern]]] = []

        for category, pattern in self.catalog.iter_patterns():
            if is_wildcard(pattern):
                self._rules.append((category, wildcard_to_regex(pattern)))
            else:
                self._rules.append((category, pattern))

    def classify(self, file_name: str, relative_path: str) -> Optional[str]:
        """
        Find the category of a file.

        Args:
            file_name: Base name of the file
            relative_path: Path relative to the search root, using ``/`` separators

        Returns:
            Name of the first category with a matching pattern, None if the
            file is not a configuration file
        """
        for category, rule in self._rules:
            if isinstance(rule, str):
                if file_name == rule or relative_path == rule:
                    return category
            elif rule.search(relative_path):
                return category
        return None
