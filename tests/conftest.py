"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_path() -> Path:
    """Path of the sample module used by the lookup tests."""
    return FIXTURES_DIR / "some_module.py"


@pytest.fixture
def extractor(fixture_path: Path):
    """CallableExtractor over the sample module."""
    from callable_extractor import CallableExtractor

    return CallableExtractor.from_file(fixture_path)
