"""
Pytest Configuration and Fixtures
=================================

Shared fixtures for the generator tests. Go inputs live under
tests/TestFixtures/Go.
"""

from pathlib import Path

import pytest

from gen_interface.config import GenerationConfig
from gen_interface.source import CompilationUnit, parse_source

FIXTURES_DIR = Path(__file__).parent / "TestFixtures" / "Go"


# =============================================================================
# Paths
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Root of the Go fixture tree."""
    return FIXTURES_DIR


@pytest.fixture
def go_src(tmp_path: Path):
    """Write Go files into a temporary source tree.

    Call with a mapping of relative path -> source text; returns the root.
    """
    root = tmp_path / "src"

    def write(files: dict[str, str]) -> Path:
        for rel, text in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        root.mkdir(exist_ok=True)
        return root

    return write


# =============================================================================
# Parsing and Configuration
# =============================================================================


def parse_go(text: str, path: str = "input.go") -> CompilationUnit:
    """Parse Go source given as text."""
    return parse_source(text.encode("utf-8"), path)


@pytest.fixture
def config() -> GenerationConfig:
    """Default options with the gofmt pass disabled."""
    return GenerationConfig.create(gofmt_command=None)
