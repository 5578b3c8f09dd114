"""Shared pytest configuration and fixtures for the qr_tools test suite."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Make ``qr_tools`` and ``tests.infrastructure`` importable without installing
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "hardware: needs a real camera or a display")


def pytest_addoption(parser):
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="Also run tests marked 'hardware' (camera or display required)",
    )


def pytest_collection_modifyitems(config, items):
    """Tests marked ``hardware`` are skipped unless --run-hardware is given."""
    if config.getoption("--run-hardware"):
        return
    skip = pytest.mark.skip(reason="camera/display test: pass --run-hardware to run")
    for item in items:
        if item.get_closest_marker("hardware") is not None:
            item.add_marker(skip)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def blank_frame() -> np.ndarray:
    """A black 640x480 BGR frame, the size the scanner requests."""
    return np.zeros((480, 640, 3), dtype=np.uint8)
