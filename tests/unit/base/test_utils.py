"""Unit tests for FrameStats in base module."""

import pytest

from tests.infrastructure.mocks.qr_mocks import FakeClock


class TestFrameStatsLatency:
    """Test the smoothed per-frame latency."""

    def test_init_zero(self):
        from qr_tools.modules.base.utils import FrameStats

        stats = FrameStats(clock=FakeClock())

        assert stats.avg_ms == 0.0
        assert stats.avg_fps == 0.0
        assert stats.frames_in_window == 0.0

    def test_record_frame_single_sample(self):
        from qr_tools.modules.base.utils import FrameStats

        stats = FrameStats(clock=FakeClock())

        assert stats.record_frame(10.0) == pytest.approx(0.2)

    def test_record_frame_recurrence(self):
        from qr_tools.modules.base.utils import FrameStats

        stats = FrameStats(clock=FakeClock())
        expected = 0.0
        for duration in (12.0, 30.0, 5.5, 0.0, 100.0):
            expected = 0.98 * expected + 0.02 * duration
            stats.record_frame(duration)

        assert stats.avg_ms == pytest.approx(expected)

    def test_record_frame_converges(self):
        from qr_tools.modules.base.utils import FrameStats

        stats = FrameStats(clock=FakeClock())
        for _ in range(2000):
            stats.record_frame(25.0)

        assert stats.avg_ms == pytest.approx(25.0, rel=1e-6)


class TestFrameStatsFps:
    """Test the once-per-window fps fold."""

    def test_tick_within_window_only_counts(self):
        from qr_tools.modules.base.utils import FrameStats

        clock = FakeClock()
        stats = FrameStats(clock=clock)
        for _ in range(5):
            stats.tick()
            clock.advance(100)

        assert stats.frames_in_window == 5.0
        assert stats.avg_fps == 0.0

    def test_tick_folds_after_window(self):
        from qr_tools.modules.base.utils import FrameStats

        clock = FakeClock()
        stats = FrameStats(clock=clock)
        for _ in range(5):
            stats.tick()
        clock.advance(1001)

        assert stats.tick() == pytest.approx(1.5)
        # The frame that triggered the fold starts the next window
        assert stats.frames_in_window == 1.0
        assert stats.window_start_ms == 1001

    def test_tick_exactly_one_second_does_not_fold(self):
        from qr_tools.modules.base.utils import FrameStats

        clock = FakeClock()
        stats = FrameStats(clock=clock)
        stats.tick()
        clock.advance(1000)
        stats.tick()

        assert stats.avg_fps == 0.0
        assert stats.frames_in_window == 2.0

    def test_tick_folds_at_most_once_per_window(self):
        from qr_tools.modules.base.utils import FrameStats

        clock = FakeClock()
        stats = FrameStats(clock=clock)
        folds = 0
        previous = stats.window_start_ms
        for _ in range(100):
            clock.advance(33)
            stats.tick()
            if stats.window_start_ms != previous:
                folds += 1
                previous = stats.window_start_ms

        # 3300 ms of frames: windows roll at >1000 ms each
        assert folds == 3

    def test_steady_rate_converges(self):
        from qr_tools.modules.base.utils import FrameStats

        clock = FakeClock()
        stats = FrameStats(clock=clock)
        # 30 frames per window: 29 ticks inside, the 30th rolls it over
        for _ in range(60 * 30):
            clock.advance(1001 / 30)
            stats.tick()

        assert 25.0 < stats.avg_fps <= 31.0


def test_monotonic_ms_increases():
    from qr_tools.modules.base.utils import monotonic_ms

    first = monotonic_ms()
    second = monotonic_ms()

    assert second >= first
