"""Accumulation of matched files into a Result Set."""

from typing import Dict, List, Optional

from .models import MatchedFile, ResultSet, Summary, frozen_mapping
from .patterns import DEFAULT_CATALOG, PatternCatalog


class ResultAggregator:
    """Builds the Result Set for a single search."""

    def __init__(self, catalog: Optional[PatternCatalog] = None, group_by_category: bool = True):
        """
        Initialize the aggregator.

        Args:
            catalog: Catalog whose category order is used for the grouped output
            group_by_category: Whether to build the per-category file lists
        """
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.group_by_category = group_by_category
        self.files: List[MatchedFile] = []
        self.categorized: Dict[str, List[MatchedFile]] = {}
        self.category_counts: Dict[str, int] = {}
        self.total = 0
        self.warnings: List[str] = []

    def record(self, matched: MatchedFile) -> None:
        """Add a matched file. Recording the same file twice adds it twice."""
        self.files.append(matched)
        self.total += 1
        self.category_counts[matched.category] = self.category_counts.get(matched.category, 0) + 1

        if self.group_by_category:
            self.categorized.setdefault(matched.category, []).append(matched)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def finalize(self, root: str, duration: float = 0.0) -> ResultSet:
        """
        Snapshot the accumulated state.

        Args:
            root: Resolved search root
            duration: Search duration in seconds

        Returns:
            Read-only ResultSet
        """
        order = {category: index for index, category in enumerate(self.catalog.categories)}

        def catalog_order(category: str):
            return order.get(category, len(order))

        categories = sorted(self.category_counts, key=catalog_order)
        categorized = {
            category: tuple(self.categorized[category])
            for category in categories
            if category in self.categorized
        }
        # Every catalog category gets a count, zero included
        counts = {category: 0 for category in self.catalog.categories}
        for category in categories:
            counts[category] = self.category_counts[category]

        return ResultSet(
            root=root,
            files=tuple(self.files),
            categorized=frozen_mapping(categorized),
            summary=Summary(total=self.total, by_category=frozen_mapping(counts)),
            warnings=tuple(self.warnings),
            duration=duration,
        )
