"""Catalog of known configuration file name patterns."""

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Tuple, Union

from .exceptions import ValidationError


# Category order matters: the first category with a matching pattern wins.
CONFIG_PATTERNS: Dict[str, List[str]] = {
    # Package managers and build tools
    "package": ["package.json", "package-lock.json", "yarn.lock", "pnpm-lock.yaml"],
    "build": ["webpack.config.js", "webpack.config.ts", "vite.config.js", "vite.config.ts", "rollup.config.js"],
    "typescript": ["tsconfig.json", "tsconfig.build.json", "tsconfig.app.json"],

    # Environment and configuration
    "environment": [".env", ".env.local", ".env.development", ".env.production", ".env.example"],

    # Linting and formatting
    "eslint": [".eslintrc.js", ".eslintrc.json", ".eslintrc", "eslint.config.js"],
    "prettier": [".prettierrc", ".prettierrc.json", ".prettierrc.js", "prettier.config.js"],

    # Testing
    "jest": ["jest.config.js", "jest.config.json", "jest.config.ts"],

    # Git and CI/CD
    "git": [".gitignore", ".gitattributes"],
    "ci": [".github/workflows/*.yml", ".github/workflows/*.yaml", ".travis.yml", "circle.yml"],

    # Docker
    "docker": ["Dockerfile", "docker-compose.yml", "docker-compose.yaml", ".dockerignore"],

    # Editor configurations
    "editor": [".editorconfig", ".vscode/settings.json", ".vscode/launch.json"],

    # Framework specific
    "next": ["next.config.js", "next.config.ts"],
    "react": [".babelrc", ".babelrc.json", "babel.config.js"],
    "vue": ["vue.config.js"],

    # Other common configs
    "misc": ["README.md", "LICENSE", "CHANGELOG.md", ".nvmrc", ".node-version"],
}


class PatternCatalog(Mapping):
    """Immutable, ordered mapping of category name to filename patterns."""

    def __init__(self, patterns: Union[Mapping, Iterable[Tuple[str, Iterable[str]]]]):
        """
        Build a catalog from category/pattern data.

        Args:
            patterns: Mapping (or iterable of pairs) of category name to an
                      ordered sequence of literal names or ``*`` globs.

        Raises:
            ValidationError: If a category name or pattern is empty or not a string
        """
        items = patterns.items() if isinstance(patterns, Mapping) else patterns
        entries: Dict[str, Tuple[str, ...]] = {}

        for category, category_patterns in items:
            if not isinstance(category, str) or not category:
                raise ValidationError(f"Invalid category name: {category!r}")
            if isinstance(category_patterns, str):
                raise ValidationError(f"Patterns for category '{category}' must be a sequence, not a string")

            frozen = tuple(category_patterns)
            for pattern in frozen:
                if not isinstance(pattern, str) or not pattern:
                    raise ValidationError(f"Invalid pattern {pattern!r} in category '{category}'")
            entries[category] = frozen

        self._entries = entries

    def __getitem__(self, category: str) -> Tuple[str, ...]:
        return self._entries[category]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PatternCatalog({list(self._entries)})"

    @property
    def categories(self) -> Tuple[str, ...]:
        """Category names in catalog order."""
        return tuple(self._entries)

    def iter_patterns(self) -> Iterator[Tuple[str, str]]:
        """Yield (category, pattern) pairs in catalog-then-pattern order."""
        for category, category_patterns in self._entries.items():
            for pattern in category_patterns:
                yield category, pattern


DEFAULT_CATALOG = PatternCatalog(CONFIG_PATTERNS)
