"""Tests for directory traversal and search."""

import errno
import os
from pathlib import Path
from types import SimpleNamespace

import pytest

from config_search.core import scanner as scanner_module
from config_search.core.exceptions import (
    DirectoryAccessError, FileSystemError, PathNotFoundError, ValidationError
)
from config_search.core.models import SearchOptions
from config_search.core.patterns import PatternCatalog
from config_search.core.scanner import ConfigScanner, search_configuration_files

from .helpers import deny_listing, make_tree


def assert_counts_consistent(results):
    assert results.summary.total == len(results.files)
    assert results.summary.total == sum(results.summary.by_category.values())


class TestSearchScenarios:
    """End-to-end searches over small trees."""

    def test_default_excludes_prune_node_modules(self, tmp_path):
        make_tree(tmp_path, ["package.json", ".gitignore", "tsconfig.json", "node_modules/foo.json",
                             "node_modules/package.json"])

        results = search_configuration_files(tmp_path)

        assert results.summary.total == 3
        categories = {matched.name: matched.category for matched in results.files}
        assert categories == {"package.json": "package", ".gitignore": "git", "tsconfig.json": "typescript"}
        assert all(not matched.relative_path.startswith("node_modules") for matched in results.files)
        assert_counts_consistent(results)

    def test_max_depth_zero_skips_subdirectories(self, tmp_path):
        make_tree(tmp_path, ["package.json", ".gitignore", "src/index.js", "src/tsconfig.json"])

        results = search_configuration_files(tmp_path, {"max_depth": 0})

        names = [matched.relative_path for matched in results.files]
        assert names == [".gitignore", "package.json"]
        assert all("/" not in matched.relative_path for matched in results.files)

    def test_max_depth_limits_descent(self, tmp_path):
        make_tree(tmp_path, ["a/package.json", "a/b/.gitignore", "a/b/c/tsconfig.json"])

        results = search_configuration_files(tmp_path, {"max_depth": 2})

        assert [matched.relative_path for matched in results.files] == ["a/b/.gitignore", "a/package.json"]

    def test_no_recursion(self, project):
        results = search_configuration_files(project, {"recursive": False})

        assert {matched.name for matched in results.files} == {"package.json", ".gitignore", "tsconfig.json"}

    def test_project_tree(self, project):
        results = search_configuration_files(project)

        paths = [matched.relative_path for matched in results.files]
        assert paths == [
            ".github/workflows/ci.yml",
            ".gitignore",
            ".vscode/settings.json",
            "package.json",
            "src/.eslintrc.json",
            "tsconfig.json",
        ]
        by_path = {matched.relative_path: matched.category for matched in results.files}
        assert by_path[".github/workflows/ci.yml"] == "ci"
        assert by_path[".vscode/settings.json"] == "editor"
        assert by_path["src/.eslintrc.json"] == "eslint"
        assert_counts_consistent(results)

    def test_pre_order_traversal(self, tmp_path):
        make_tree(tmp_path, ["a/package.json", "b.env/.env", "c/.gitignore", "yarn.lock"])

        results = search_configuration_files(tmp_path)

        assert [matched.relative_path for matched in results.files] == [
            "a/package.json", "b.env/.env", "c/.gitignore", "yarn.lock"
        ]

    def test_empty_directory_is_not_an_error(self, tmp_path):
        results = search_configuration_files(tmp_path)

        assert results.is_empty
        assert results.files == ()
        assert results.summary.total == 0
        assert dict(results.categorized) == {}

    def test_default_path_is_current_directory(self, project, monkeypatch):
        monkeypatch.chdir(project)

        results = search_configuration_files()

        assert results.root == str(project.resolve())
        assert results.summary.total == 6


class TestMatchedFileRecords:
    """Test the records produced by a search."""

    def test_record_fields(self, tmp_path):
        make_tree(tmp_path, ["config/.env"])
        (tmp_path / "config" / ".env").write_text("A=1\n", encoding="utf-8")

        results = search_configuration_files(tmp_path)

        matched = results.files[0]
        assert matched.name == ".env"
        assert matched.relative_path == "config/.env"
        assert Path(matched.absolute_path) == (tmp_path / "config" / ".env").resolve()
        assert matched.category == "environment"
        assert matched.size == 4
        assert matched.modified.timestamp() == pytest.approx(os.stat(matched.absolute_path).st_mtime, abs=1)

    def test_each_record_once_in_flat_and_grouped(self, project):
        results = search_configuration_files(project)

        grouped = [matched for matches in results.categorized.values() for matched in matches]
        assert sorted(grouped, key=lambda m: m.relative_path) == sorted(results.files, key=lambda m: m.relative_path)
        for category, matches in results.categorized.items():
            assert results.summary.by_category[category] == len(matches)
            assert all(matched.category == category for matched in matches)

    def test_grouped_categories_follow_catalog_order(self, project):
        results = search_configuration_files(project)

        assert list(results.categorized) == ["package", "typescript", "eslint", "git", "ci", "editor"]

    def test_search_is_repeatable(self, project):
        first = search_configuration_files(project)
        second = search_configuration_files(project)

        assert first.files == second.files

    def test_duration_uses_monotonic_clock(self, project, monkeypatch):
        ticks = iter([100.0, 100.25])
        monkeypatch.setattr(scanner_module, "time", SimpleNamespace(perf_counter=lambda: next(ticks)))

        results = search_configuration_files(project)

        assert results.duration == pytest.approx(0.25)


class TestExclusions:
    """Test excluded path prefixes."""

    def test_excluded_prefix_and_not_sibling(self, tmp_path):
        make_tree(tmp_path, ["packages/legacy/package.json", "packages/legacy2/package.json"])

        results = search_configuration_files(tmp_path, {"exclude_paths": ["packages/legacy"]})

        assert [matched.relative_path for matched in results.files] == ["packages/legacy2/package.json"]

    def test_excluded_file(self, tmp_path):
        make_tree(tmp_path, [".env", ".env.local"])

        results = search_configuration_files(tmp_path, {"exclude_paths": [".env"]})

        assert [matched.name for matched in results.files] == [".env.local"]

    def test_excluded_directory_is_never_listed(self, tmp_path, monkeypatch):
        make_tree(tmp_path, ["package.json", "dist/package.json"])
        deny_listing(monkeypatch, "dist")

        results = search_configuration_files(tmp_path)

        assert results.warnings == ()
        assert results.summary.total == 1

    def test_no_excludes(self, tmp_path):
        make_tree(tmp_path, ["node_modules/package.json"])

        results = search_configuration_files(tmp_path, {"exclude_paths": []})

        assert [matched.relative_path for matched in results.files] == ["node_modules/package.json"]

    def test_excluded_prefix_never_in_results(self, project):
        results = search_configuration_files(project, {"exclude_paths": ["src", ".github"]})

        for matched in results.files:
            assert not matched.relative_path.startswith("src/")
            assert not matched.relative_path.startswith(".github/")


class TestGrouping:
    """Test the group_by_category option."""

    def test_grouping_disabled(self, project):
        results = search_configuration_files(project, {"group_by_category": False})

        assert dict(results.categorized) == {}
        assert not results.is_grouped
        assert results.summary.total == 6
        assert_counts_consistent(results)


class TestErrorHandling:
    """Test fatal and recoverable errors."""

    def test_missing_root(self, tmp_path):
        missing = tmp_path / "does" / "not" / "exist"

        with pytest.raises(PathNotFoundError) as exc_info:
            search_configuration_files(missing)

        message = str(exc_info.value)
        assert "does not exist" in message
        assert str(missing.resolve()) in message

    def test_root_is_a_file(self, tmp_path):
        make_tree(tmp_path, ["package.json"])

        with pytest.raises(FileSystemError):
            search_configuration_files(tmp_path / "package.json")

    def test_unreadable_root(self, tmp_path, monkeypatch):
        root = tmp_path / "locked"
        make_tree(root, ["package.json"])
        deny_listing(monkeypatch, "locked")

        with pytest.raises(DirectoryAccessError):
            search_configuration_files(root)

    def test_unreadable_subdirectory_is_skipped(self, tmp_path, monkeypatch, caplog):
        make_tree(tmp_path, ["package.json", "locked/.env", "open/.gitignore"])
        deny_listing(monkeypatch, "locked")

        with caplog.at_level("WARNING", logger="config_search"):
            results = search_configuration_files(tmp_path)

        assert [matched.relative_path for matched in results.files] == ["open/.gitignore", "package.json"]
        assert len(results.warnings) == 1
        assert "locked" in results.warnings[0]
        assert any("Could not read directory" in record.getMessage() for record in caplog.records)

    def test_vanished_file_is_skipped(self, tmp_path, monkeypatch):
        make_tree(tmp_path, ["package.json", ".gitignore"])
        real_create = scanner_module.MatchedFile.create

        def fake_create(file_path, relative_path, category):
            if file_path.name == ".gitignore":
                raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(file_path))
            return real_create(file_path, relative_path, category)

        monkeypatch.setattr(scanner_module.MatchedFile, "create", fake_create)

        results = search_configuration_files(tmp_path)

        assert [matched.name for matched in results.files] == ["package.json"]
        assert len(results.warnings) == 1

    def test_unreadable_entry_type_is_skipped(self, tmp_path, monkeypatch):
        make_tree(tmp_path, ["a/package.json", "a/broken.json", "b/.gitignore"])
        real_list = ConfigScanner._list_directory

        class UnreadableEntry:
            def __init__(self, entry):
                self.name = entry.name
                self.path = entry.path

            def is_file(self, follow_symlinks=True):
                raise PermissionError(errno.EACCES, "Permission denied", self.path)

            is_dir = is_file

        def fake_list(self, directory):
            return [UnreadableEntry(entry) if entry.name == "broken.json" else entry
                    for entry in real_list(self, directory)]

        monkeypatch.setattr(ConfigScanner, "_list_directory", fake_list)

        results = search_configuration_files(tmp_path)

        assert [matched.relative_path for matched in results.files] == ["a/package.json", "b/.gitignore"]
        assert len(results.warnings) == 1
        assert "broken.json" in results.warnings[0]

    def test_unknown_option_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            search_configuration_files(tmp_path, {"maxDepth": 1})

    def test_negative_depth_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            search_configuration_files(tmp_path, {"max_depth": -1})


class TestSymlinks:
    """Symbolic links are neither followed nor matched."""

    def test_symlinks_ignored(self, tmp_path):
        root = make_tree(tmp_path / "project", ["package.json"])
        try:
            os.symlink(root, root / "loop", target_is_directory=True)
            os.symlink(root / "package.json", root / "tsconfig.json")
        except (OSError, NotImplementedError):
            pytest.skip("Symbolic links not supported")

        results = search_configuration_files(root, {"max_depth": 10})

        assert [matched.relative_path for matched in results.files] == ["package.json"]


class TestCustomCatalog:
    """Callers can substitute their own catalog."""

    def test_custom_catalog(self, tmp_path):
        make_tree(tmp_path, ["pyproject.toml", "setup.cfg", "package.json"])
        catalog = PatternCatalog({"python": ["pyproject.toml", "setup.cfg"]})

        results = ConfigScanner(catalog).search(tmp_path, SearchOptions())

        assert [matched.name for matched in results.files] == ["pyproject.toml", "setup.cfg"]
        assert dict(results.summary.by_category) == {"python": 2}
