"""Shared fixtures for config-search tests."""

import logging

import pytest

from config_search.core import logging_config

from .helpers import make_tree


@pytest.fixture
def project(tmp_path):
    """A small project tree with config files at several depths."""
    return make_tree(tmp_path, [
        "package.json",
        ".gitignore",
        "tsconfig.json",
        "index.js",
        "node_modules/foo.json",
        "node_modules/left-pad/package.json",
        "src/index.js",
        "src/.eslintrc.json",
        ".github/workflows/ci.yml",
        ".vscode/settings.json",
    ])


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging setup done by the CLI so handlers don't leak between tests."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    if logging_config._logging_manager is not None:
        logging_config._logging_manager.shutdown()
        logging_config._logging_manager = None
    root_logger.setLevel(level)
