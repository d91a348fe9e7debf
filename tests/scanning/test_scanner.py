"""Tests for path expansion."""

import re

import pytest

from gosca.exceptions import FileAccessError
from gosca.scanning import is_ignored, iter_source_files, read_source


def _relative(paths, root):
    return [str(p).replace(str(root), "").lstrip("/\\").replace("\\", "/") for p in paths]


class TestIsIgnored:
    """Test is_ignored()."""

    def test_no_pattern(self):
        assert not is_ignored("a/b_test.go", None)

    def test_search_semantics(self):
        pattern = re.compile(r"_test\.go$")
        assert is_ignored("a/b_test.go", pattern)
        assert not is_ignored("a/b.go", pattern)

    def test_matches_anywhere_in_path(self):
        assert is_ignored("vendor/x/y.go", re.compile("vendor/"))


class TestIterSourceFiles:
    """Test iter_source_files()."""

    def test_walks_directories_in_lexical_order(self, go_tree):
        files = list(iter_source_files([str(go_tree)]))
        assert _relative(files, go_tree) == ["main.go", "pkg/util.go", "pkg/util_test.go"]

    def test_ignore_pattern(self, go_tree):
        files = list(iter_source_files([str(go_tree)], ignore=re.compile(r"_test\.go$")))
        assert _relative(files, go_tree) == ["main.go", "pkg/util.go"]

    def test_explicit_file_kept_whatever_suffix(self, go_tree):
        readme = go_tree / "pkg" / "README.md"
        assert list(iter_source_files([str(readme)])) == [str(readme)]

    def test_explicit_file_still_ignorable(self, go_tree):
        path = go_tree / "main.go"
        assert list(iter_source_files([str(path)], ignore=re.compile("main"))) == []

    def test_missing_path_is_recorded(self, tmp_path):
        errors = []
        files = list(iter_source_files([str(tmp_path / "nope")], errors=errors))
        assert files == []
        assert len(errors) == 1
        assert isinstance(errors[0], FileAccessError)

    def test_custom_extensions(self, tmp_path):
        (tmp_path / "a.go").write_text("package a\n")
        (tmp_path / "b.gox").write_text("package b\n")
        files = list(iter_source_files([str(tmp_path)], extensions=(".gox",)))
        assert _relative(files, tmp_path) == ["b.gox"]


class TestReadSource:
    """Test read_source()."""

    def test_reads_bytes(self, tmp_path):
        path = tmp_path / "a.go"
        path.write_text("package a\n")
        assert read_source(str(path)) == b"package a\n"

    def test_unreadable_raises(self, tmp_path):
        with pytest.raises(FileAccessError):
            read_source(str(tmp_path / "missing.go"))
