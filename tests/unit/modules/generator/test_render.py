"""Unit tests for generator rendering."""

import cv2
import numpy as np

from qr_tools.core.errors import EncodeError
from qr_tools.modules.Generator.generator_core.encoder import ModuleGrid, QRCodeEncoder
from qr_tools.modules.Generator.generator_core.render import (
    compose_canvas,
    compose_saved_canvas,
    info_lines,
    modules_to_image,
    render_qr,
    save_qr,
)
from qr_tools.modules.Generator.generator_core.state import GeneratorState, apply_key


class FailingEncoder:
    def encode(self, text, params):
        raise EncodeError("too long")


class TestModulesToImage:

    def test_padding_and_scale(self):
        modules = np.zeros((21, 21), dtype=bool)
        modules[0, 0] = True

        image = modules_to_image(ModuleGrid(modules, 1), quiet_zone=2, scale=3)

        assert image.shape == ((21 + 4) * 3, (21 + 4) * 3)
        assert image.dtype == np.uint8
        # Quiet zone is light, the first dark module starts right after it
        assert (image[:6, :] == 255).all()
        assert (image[6:9, 6:9] == 0).all()
        assert (image[9:, 9:] == 255).all()

    def test_no_quiet_zone_unit_scale(self):
        modules = np.eye(3, dtype=bool)

        image = modules_to_image(ModuleGrid(modules, 1), quiet_zone=0, scale=1)

        assert image.tolist() == [[0, 255, 255], [255, 0, 255], [255, 255, 0]]


class TestRenderQr:

    def test_default_payload_size(self):
        qr = render_qr(GeneratorState(), QRCodeEncoder())

        # version 1: 21 modules + 2 * 7 quiet zone, 15 px each
        assert qr.shape == (525, 525)

    def test_empty_payload_placeholder(self):
        qr = render_qr(GeneratorState(text=""), QRCodeEncoder())

        assert qr.shape == (240, 240)
        assert (qr == 255).all()

    def test_encode_failure_placeholder(self):
        qr = render_qr(GeneratorState(), FailingEncoder())

        assert qr.shape == (240, 240)
        assert (qr == 200).all()

    def test_version_bump_on_long_payload_still_renders(self):
        state = GeneratorState(text="A" * 24)
        apply_key(state, ord("V"))

        qr = render_qr(state, QRCodeEncoder())

        assert state.version == 1
        # version 2: 25 modules + 2 * 7 quiet zone, 15 px each
        assert qr.shape == (585, 585)
        assert (qr == 0).any()

    def test_render_decodes_back(self):
        state = GeneratorState(text="round trip", scale=6, quiet_zone=4)
        qr = render_qr(state, QRCodeEncoder())

        text, _, _ = cv2.QRCodeDetector().detectAndDecode(cv2.cvtColor(qr, cv2.COLOR_GRAY2BGR))

        assert text == "round trip"


class TestCanvas:

    def test_canvas_layout(self):
        qr = np.zeros((100, 100), dtype=np.uint8)

        canvas = compose_canvas(qr, GeneratorState())

        assert canvas.shape == (220, 640, 3)
        x = (640 - 100) // 2
        assert (canvas[10:110, x:x + 100] == 0).all()
        assert (canvas[:10] == 255).all()

    def test_wide_qr_sets_canvas_width(self):
        canvas = compose_canvas(np.zeros((700, 700), dtype=np.uint8), GeneratorState())

        assert canvas.shape == (820, 700, 3)

    def test_help_overlay_only_when_toggled(self):
        qr = np.full((100, 100), 255, dtype=np.uint8)

        plain = compose_canvas(qr, GeneratorState(show_help=False))
        with_help = compose_canvas(qr, GeneratorState(show_help=True))

        assert (plain == 255).all()
        assert not (with_help == 255).all()

    def test_saved_canvas(self, tmp_path):
        qr = np.full((100, 100), 255, dtype=np.uint8)

        canvas = compose_saved_canvas(qr, tmp_path / "a.png")

        assert canvas.shape == (160, 480, 3)
        # Confirmation drawn in the bottom band
        assert not (canvas[110:] == 255).all()

    def test_info_lines(self, tmp_path):
        lines = [text for text, _ in info_lines(GeneratorState(text="", output=tmp_path / "x.png"))]

        assert lines[1] == "Text: <empty>"
        assert "ECL: M" in lines[2]
        assert lines[4].endswith("x.png")


class TestSaveQr:

    def test_writes_png(self, tmp_path):
        qr = render_qr(GeneratorState(scale=2, quiet_zone=1), QRCodeEncoder())
        path = tmp_path / "code.png"

        assert save_qr(qr, path)

        loaded = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        assert loaded.shape == qr.shape
        assert (loaded == qr).all()

    def test_unwritable_path(self, tmp_path):
        qr = np.zeros((10, 10), dtype=np.uint8)

        assert not save_qr(qr, tmp_path / "missing" / "code.png")
