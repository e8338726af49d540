"""Helpers for building test trees."""

import errno
import os
from pathlib import Path

from config_search.core import scanner as scanner_module


def make_tree(root: Path, files):
    """Create files (relative paths) under root, with parent directories."""
    for relative in files:
        file_path = root / relative
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(f"# {relative}\n", encoding="utf-8")
    return root


def deny_listing(monkeypatch, *names):
    """Make os.scandir fail with EACCES for directories with the given names."""
    real_scandir = os.scandir

    def fake_scandir(path):
        if Path(path).name in names:
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(scanner_module.os, "scandir", fake_scandir)
