"""Shared test fixtures for gosca tests."""

import os
import textwrap

import pytest

from gosca.complexity import analyze_source_file
from gosca.scanning import GoTreeNormalizer


@pytest.fixture
def normalizer():
    """A fresh Go normalizer."""
    return GoTreeNormalizer()


@pytest.fixture
def parse_go(normalizer):
    """Parse dedented Go source into a SourceFile."""

    def _parse(code, path="main.go"):
        return normalizer.parse_file(textwrap.dedent(code).encode("utf-8"), path)

    return _parse


@pytest.fixture
def measure(parse_go):
    """Measure dedented Go source; returns {func_name: Stat}."""

    def _measure(code, path="main.go"):
        stats = analyze_source_file(parse_go(code, path))
        return {stat.func_name: stat for stat in stats}

    return _measure


@pytest.fixture
def go_tree(tmp_path):
    """A small Go module on disk."""
    pkg = tmp_path / "pkg"
    pkg.mkdir()
    (tmp_path / "main.go").write_text(
        textwrap.dedent(
            """\
            package main

            func main() {
                if true {
                    println("hi")
                }
            }
            """
        )
    )
    (pkg / "util.go").write_text(
        textwrap.dedent(
            """\
            package pkg

            func Simple() int {
                return 1
            }

            func Branchy(a, b bool) int {
                if a && b {
                    return 1
                }
                for i := 0; i < 3; i++ {
                    if i > 1 {
                        return i
                    }
                }
                return 0
            }
            """
        )
    )
    (pkg / "util_test.go").write_text(
        textwrap.dedent(
            """\
            package pkg

            func helper() {}
            """
        )
    )
    (pkg / "README.md").write_text("not go\n")
    return tmp_path


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path_factory):
    """Keep user config files and GOSCA_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("GOSCA_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
