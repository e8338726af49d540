"""Core data models for the configuration file search tool."""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from .exceptions import ValidationError


DEFAULT_EXCLUDE_PATHS: Tuple[str, ...] = ("node_modules", ".git", "dist", "build")


def normalize_separators(path: str) -> str:
    """Return the path with backslashes replaced by forward slashes."""
    return path.replace("\\", "/")


@dataclass(frozen=True)
class MatchedFile:
    """A file that matched a configuration category."""
    name: str
    relative_path: str
    absolute_path: str
    category: str
    size: int
    modified: datetime

    @classmethod
    def create(cls, file_path: Path, relative_path: str, category: str) -> "MatchedFile":
        """Create a MatchedFile from a path, reading size and mtime from disk."""
        stat = file_path.stat()
        return cls(
            name=file_path.name,
            relative_path=relative_path,
            absolute_path=str(file_path),
            category=category,
            size=stat.st_size,
            modified=datetime.fromtimestamp(stat.st_mtime),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.relative_path,
            "full_path": self.absolute_path,
            "category": self.category,
            "size": self.size,
            "modified": self.modified.isoformat(),
        }


@dataclass(frozen=True)
class SearchOptions:
    """Options for a configuration file search."""
    recursive: bool = True
    max_depth: int = 3
    exclude_paths: Tuple[str, ...] = DEFAULT_EXCLUDE_PATHS
    group_by_category: bool = True

    def __post_init__(self):
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValidationError(f"max_depth must be an integer, got {self.max_depth!r}")
        if self.max_depth < 0:
            raise ValidationError(f"max_depth must be >= 0, got {self.max_depth}")
        if isinstance(self.exclude_paths, str):
            raise ValidationError("exclude_paths must be a collection of path prefixes, not a string")

        normalized = []
        for prefix in self.exclude_paths:
            prefix = normalize_separators(str(prefix)).rstrip("/")
            while prefix.startswith("./"):
                prefix = prefix[2:]
            if prefix and prefix not in normalized:
                normalized.append(prefix)
        # Frozen dataclass; bypass __setattr__ to store the normalized prefixes
        object.__setattr__(self, "exclude_paths", tuple(normalized))

    def with_overrides(self, **overrides) -> "SearchOptions":
        """
        Return a copy with caller-supplied overrides applied.

        Raises:
            ValidationError: If an override names an unknown option or has an invalid value
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValidationError(f"Unknown search option(s): {', '.join(unknown)}")
        return replace(self, **overrides)

    def is_excluded(self, relative_path: str) -> bool:
        """Check whether a ``/``-separated relative path falls under an excluded prefix."""
        for prefix in self.exclude_paths:
            if relative_path == prefix or relative_path.startswith(prefix + "/"):
                return True
        return False


@dataclass(frozen=True)
class FormatOptions:
    """Presentation options for formatted results."""
    show_paths: bool = True
    show_summary: bool = True
    group_by_category: bool = True


@dataclass(frozen=True)
class Summary:
    """Counts for a search."""
    total: int
    by_category: Mapping[str, int] = field(default_factory=dict)

    def top_categories(self, limit: int = 3) -> List[Tuple[str, int]]:
        """Return the most common non-empty categories, largest first."""
        non_empty = [(category, count) for category, count in self.by_category.items() if count > 0]
        # sorted() is stable, so ties keep catalog order
        return sorted(non_empty, key=lambda item: item[1], reverse=True)[:limit]


@dataclass(frozen=True)
class ResultSet:
    """Result of a configuration file search."""
    root: str
    files: Tuple[MatchedFile, ...]
    categorized: Mapping[str, Tuple[MatchedFile, ...]]
    summary: Summary
    warnings: Tuple[str, ...] = ()
    duration: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.summary.total == 0

    @property
    def is_grouped(self) -> bool:
        """True if the per-category grouping was built for this search."""
        return bool(self.categorized) or self.is_empty

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "found": [matched.to_dict() for matched in self.files],
            "categorized": {
                category: [matched.to_dict() for matched in matches]
                for category, matches in self.categorized.items()
            },
            "summary": {
                "total": self.summary.total,
                "by_category": dict(self.summary.by_category),
            },
            "warnings": list(self.warnings),
            "duration": self.duration,
        }


def frozen_mapping(data: Dict) -> Mapping:
    """Wrap a dict in a read-only view."""
    return MappingProxyType(dict(data))

