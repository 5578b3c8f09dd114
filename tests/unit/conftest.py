"""Unit test fixtures for isolated, fast test execution.

Every fixture here runs without a camera, a display or a terminal; the
fakes themselves live in ``tests.infrastructure.mocks.qr_mocks``.
"""

from __future__ import annotations

from typing import Callable, List

import numpy as np
import pytest

from tests.infrastructure.mocks.qr_mocks import FakeClock


@pytest.fixture(scope="function")
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def frame_factory() -> Callable[..., List[np.ndarray]]:
    """Build ``count`` black BGR frames of the given size.

    Example:
        def test_three_frames(frame_factory):
            frames = frame_factory(3)
    """

    def factory(count: int, width: int = 640, height: int = 480) -> List[np.ndarray]:
        return [np.zeros((height, width, 3), dtype=np.uint8) for _ in range(count)]

    return factory


@pytest.fixture(scope="function")
def events() -> List[str]:
    """Shared event log for ordering assertions across fakes."""
    return []
