"""Command line interface for config-search."""
