"""Main entry point for config-search.

This allows the package to be run as:
    python -m config_search
"""

from .cli.main import cli

if __name__ == "__main__":
    cli()
