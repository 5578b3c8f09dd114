"""QR encoding backed by the ``qrcode`` package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np
import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError
from qrcode.util import MODE_8BIT_BYTE, QRData

from qr_tools.core.errors import EncodeError

from .state import ECL_NAMES, clamp

_ECL_CONSTANTS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


@dataclass(frozen=True, slots=True)
class EncodeParams:
    version: int = 0     # minimum version; 0 = smallest that fits
    ecl_index: int = 1   # index into ECL_NAMES


@dataclass(frozen=True, slots=True)
class ModuleGrid:
    """Square symbol without quiet zone; True marks a dark module."""

    modules: np.ndarray
    version: int

    @property
    def size(self) -> int:
        return int(self.modules.shape[0])


class Encoder(Protocol):
    def encode(self, text: str, params: EncodeParams) -> ModuleGrid:
        ...


class QRCodeEncoder:
    """Byte-mode encoder; the quiet zone is added by the renderer."""

    def encode(self, text: str, params: EncodeParams) -> ModuleGrid:
        if not text:
            raise EncodeError("cannot encode an empty payload")
        version = clamp(params.version, 0, 40)
        ecl = ECL_NAMES[clamp(params.ecl_index, 0, len(ECL_NAMES) - 1)]
        qr = qrcode.QRCode(
            version=version or None,
            error_correction=_ECL_CONSTANTS[ecl],
            box_size=1,
            border=0,
        )
        try:
            qr.add_data(QRData(text.encode("utf-8"), mode=MODE_8BIT_BYTE))
            # fit=True searches upward from the requested version
            qr.make(fit=True)
        except DataOverflowError as exc:
            raise EncodeError(
                f"{len(text.encode('utf-8'))} bytes do not fit version {version or 1} or above at ECL {ecl}"
            ) from exc
        except ValueError as exc:
            raise EncodeError(str(exc)) from exc
        modules = np.array(qr.get_matrix(), dtype=bool)
        return ModuleGrid(modules=modules, version=int(qr.version))


__all__ = ["EncodeParams", "ModuleGrid", "Encoder", "QRCodeEncoder"]
