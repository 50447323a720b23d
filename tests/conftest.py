"""
Global test configuration for the time conductor.

This module provides global pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Ensure the project root and src directory are importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
for path in (PROJECT_ROOT, PROJECT_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from timeconductor.runtime.conductor import TimeConductor  # noqa: E402
from tests.fixtures.fakes import FakeTickSource, make_time_system  # noqa: E402


@pytest.fixture
def conductor():
    return TimeConductor()


@pytest.fixture
def realtime_source():
    return FakeTickSource("clock", "realtime")


@pytest.fixture
def lad_source():
    return FakeTickSource("lad", "LAD")


@pytest.fixture
def realtime_system(realtime_source):
    """Zero default bounds with deltas of 1000 before and 500 after."""
    return make_time_system("utc", realtime_source, bounds=(0, 0), deltas=(1000, 500))


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after configure_logging() runs."""
    import logging

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
