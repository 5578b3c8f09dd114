"""Unit tests for the qrcode-backed encoder."""

import numpy as np
import pytest

from qr_tools.core.errors import EncodeError
from qr_tools.modules.Generator.generator_core.encoder import EncodeParams, QRCodeEncoder


class TestQRCodeEncoder:

    def test_auto_version_smallest_fit(self):
        grid = QRCodeEncoder().encode("Hello, QR!", EncodeParams())

        assert grid.version == 1
        assert grid.size == 21
        assert grid.modules.dtype == bool
        assert grid.modules.shape == (21, 21)

    def test_finder_pattern_top_left(self):
        grid = QRCodeEncoder().encode("Hello, QR!", EncodeParams())

        assert grid.modules[0, :7].all()
        assert grid.modules[:7, 0].all()
        assert not grid.modules[1, 1:6].any()

    def test_forced_version(self):
        grid = QRCodeEncoder().encode("abc", EncodeParams(version=40, ecl_index=3))

        assert grid.version == 40
        assert grid.size == 177

    def test_higher_ecl_needs_larger_version(self):
        text = "x" * 30
        low = QRCodeEncoder().encode(text, EncodeParams(ecl_index=0))
        high = QRCodeEncoder().encode(text, EncodeParams(ecl_index=3))

        assert high.version > low.version

    def test_chosen_version_grows_to_fit(self):
        # 24 bytes need version 2 at ECL M
        grid = QRCodeEncoder().encode("A" * 24, EncodeParams(version=1, ecl_index=1))

        assert grid.version == 2
        assert grid.size == 25

    def test_chosen_version_kept_when_data_fits(self):
        grid = QRCodeEncoder().encode("Hello, QR!", EncodeParams(version=3))

        assert grid.version == 3

    def test_overflow_beyond_version_40(self):
        with pytest.raises(EncodeError):
            QRCodeEncoder().encode("x" * 3000, EncodeParams(version=40, ecl_index=3))

    def test_empty_rejected(self):
        with pytest.raises(EncodeError):
            QRCodeEncoder().encode("", EncodeParams())

    def test_utf8_payload(self):
        grid = QRCodeEncoder().encode("héllo wörld", EncodeParams())

        assert isinstance(grid.modules, np.ndarray)
        assert grid.size >= 21
