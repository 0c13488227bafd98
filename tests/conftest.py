"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from treewire import MemorySink, Runtime, RuntimeSettings


@pytest.fixture
def sink():
    """Diagnostics sink collecting every report."""
    return MemorySink()


@pytest.fixture
def runtime(sink):
    """Fresh development-build Runtime reporting into ``sink``."""
    return Runtime(RuntimeSettings(debug=True, silent=False), sink=sink)
