"""Pytest configuration and fixtures for expbackoff tests."""

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def _reset_expbackoff_logger() -> Generator[None, None, None]:
    """Restore the expbackoff logger after tests that configure logging."""
    root = logging.getLogger("expbackoff")
    level, propagate = root.level, root.propagate
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = []
    root.setLevel(level)
    root.propagate = propagate
