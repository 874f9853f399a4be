"""
Pytest configuration and shared fixtures for afbind tests.

Every test runs against ``FakeArrayFire`` (a NumPy-backed stand-in for the
C API) unless it asks for the ``native_af`` fixture, which loads a real
ArrayFire library and skips when none is installed.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import afbind
from afbind import config
from afbind._kernel.lib_loader import LibraryNotFoundError, load_library

from fake_arrayfire import FakeArrayFire


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fake_af():
    """Route every native call through a fresh fake library."""
    lib = FakeArrayFire()
    config.set_library(lib)
    yield lib
    config.get_config().reset()


@pytest.fixture(scope="session")
def native_library():
    """Real ArrayFire library; skip if it is not installed."""
    for backend in (afbind.Backend.CPU, afbind.Backend.DEFAULT):
        try:
            return load_library(backend.library_name)
        except LibraryNotFoundError:
            continue
    pytest.skip("ArrayFire native library not available")


@pytest.fixture
def native_af(native_library, fake_af):
    """Route native calls through the real library for one test."""
    config.set_library(native_library)
    yield native_library
    config.set_library(fake_af)


@pytest.fixture
def host_matrix():
    """Small 2x3 float32 matrix for round trips.

    Matrix:
    [[1, 2, 3],
     [4, 5, 6]]
    """
    return np.array([[1, 2, 3], [4, 5, 6]], dtype=np.float32)


@pytest.fixture
def square_matrix():
    return np.array([[4.0, 7.0], [2.0, 6.0]])


# =============================================================================
# Helper Functions
# =============================================================================

def assert_array_equal(a1, a2, rtol=1e-5, atol=1e-8):
    """Assert two arrays are approximately equal."""
    if isinstance(a1, afbind.Array):
        a1 = a1.to_numpy()
    if isinstance(a2, afbind.Array):
        a2 = a2.to_numpy()

    np.testing.assert_allclose(a1, a2, rtol=rtol, atol=atol)
