"""
Shared pytest fixtures.

All tests are pure unit tests: the importer works on in-memory text, so no
files are written and no services are needed.  Static inputs live under
tests/fixtures/.
"""
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_path() -> Path:
    """Four-record RIS export: article, thesis, conference paper, web page."""
    return FIXTURES / "sample.ris"


@pytest.fixture
def sample_bytes(sample_path) -> bytes:
    return sample_path.read_bytes()


@pytest.fixture
def sample_text(sample_path) -> str:
    return sample_path.read_text(encoding="utf-8")
