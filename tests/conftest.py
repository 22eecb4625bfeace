"""Shared pytest fixtures for all tests."""

from pathlib import Path

import pytest

from js_complexity.complexity_analysis.languages import JavaScriptComplexityAnalyzer


@pytest.fixture(scope="session")
def analyzer():
    """Create a single analyzer instance for the session."""
    return JavaScriptComplexityAnalyzer()


class FakeInputFile:
    """In-memory stand-in for an InputFile."""

    def __init__(self, relative_path: str, text: str = "", error: Exception = None):
        self.relative_path = relative_path
        self.text = text
        self.error = error

    def read_text(self, encoding: str = "utf-8") -> str:
        if self.error is not None:
            raise self.error
        return self.text

    def __repr__(self):
        return f"FakeInputFile({self.relative_path!r})"


@pytest.fixture
def make_input_file():
    """Factory for in-memory input files."""
    return FakeInputFile


@pytest.fixture
def js_project(tmp_path) -> Path:
    """Create a small JavaScript project on disk."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "simple.js").write_text(
        "function add(a, b) {\n  return a + b;\n}\n", encoding="utf-8"
    )
    (tmp_path / "src" / "branchy.js").write_text(
        "function pick(a, b, c) {\n"
        "  if (a) { return 1; }\n"
        "  if (b) { return 2; }\n"
        "  if (c) { return 3; }\n"
        "  return a && b ? 4 : 5;\n"
        "}\n",
        encoding="utf-8",
    )
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("function dep() {}\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("# demo\n", encoding="utf-8")
    return tmp_path
