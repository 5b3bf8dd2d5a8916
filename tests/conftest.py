"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import os
from typing import Callable, Iterator, List

import pytest

from pantry.cache.store import Pantry
from pantry.config.options import Options


# ============================================================================
# Pantry Fixtures
# ============================================================================

@pytest.fixture
def make_pantry() -> Iterator[Callable[..., Pantry]]:
    """
    Factory fixture building pantries that are closed after the test.

    Usage:
        def test_something(make_pantry):
            pantry = make_pantry(expiration=1, cleaning_interval=0.1)
    """
    created: List[Pantry] = []

    def factory(**kwargs) -> Pantry:
        kwargs.setdefault("cleaning_interval", 60)
        pantry = Pantry(Options(**kwargs))
        created.append(pantry)
        return pantry

    yield factory

    for pantry in created:
        pantry.close(timeout=5)


@pytest.fixture
def pantry(make_pantry) -> Pantry:
    """Create a fresh pantry with a one hour TTL and no persistence."""
    return make_pantry(expiration=3600)


@pytest.fixture
def persistence_dir(tmp_path) -> str:
    """Path of a not yet created persistence directory."""
    return os.path.join(str(tmp_path), "pantry")


@pytest.fixture
def persistent_pantry(make_pantry, persistence_dir: str) -> Pantry:
    """Create a pantry persisting to ``persistence_dir``."""
    return make_pantry(expiration=3600, persistence_directory=persistence_dir)


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
