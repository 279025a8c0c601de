"""QR module matrices and the encoder that produces them."""

import dataclasses
import logging
from typing import Iterator, Protocol, Sequence

import numpy as np
import qrcode
import qrcode.constants
from qrcode.exceptions import DataOverflowError

from qr2svg.errors import InvalidGeometry, MatrixEncodingError

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,  # 7%
    "M": qrcode.constants.ERROR_CORRECT_M,  # 15%
    "Q": qrcode.constants.ERROR_CORRECT_Q,  # 25%
    "H": qrcode.constants.ERROR_CORRECT_H,  # 30%
}

DEFAULT_ERROR_CORRECTION = "M"


@dataclasses.dataclass(frozen=True, eq=False)
class ModuleMatrix:
    """Immutable square grid of QR modules, ``True`` for dark.

    The matrix holds the symbol only. The quiet zone is added by the layout
    margin and never stored here.
    """

    cells: np.ndarray

    def __post_init__(self) -> None:
        cells = np.array(self.cells, dtype=bool)
        if cells.ndim != 2 or cells.shape[0] == 0 or cells.shape[0] != cells.shape[1]:
            raise InvalidGeometry(
                f"Module matrix must be a non-empty square grid, got shape {cells.shape}"
            )
        cells.flags.writeable = False
        object.__setattr__(self, "cells", cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[bool | None]]) -> "ModuleMatrix":
        """Create a matrix from nested rows; ``None`` cells count as light."""
        if len(rows) == 0:
            raise InvalidGeometry("Module matrix must have at least one row")
        width = len(rows)
        for row in rows:
            if len(row) != width:
                raise InvalidGeometry(
                    f"Module matrix row has {len(row)} cells, expected {width}"
                )
        return cls(np.array([[bool(cell) for cell in row] for row in rows], dtype=bool))

    @property
    def size(self) -> int:
        """Side length in modules."""
        return int(self.cells.shape[0])

    def is_dark(self, row: int, col: int) -> bool:
        return bool(self.cells[row, col])

    def dark_cells(self) -> Iterator[tuple[int, int]]:
        """Iterate ``(row, col)`` of dark cells in row-major order."""
        for row, col in np.argwhere(self.cells):
            yield int(row), int(col)

    def dark_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleMatrix):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.size, self.cells.tobytes()))


class MatrixSource(Protocol):
    """Capability that turns text into a module matrix."""

    def encode(self, text: str, error_correction: str) -> ModuleMatrix: ...


def normalize_error_correction(level: str) -> str:
    """Validate an error correction level name and return it upper-cased."""
    if not isinstance(level, str) or level.upper() not in ERROR_CORRECTION_LEVELS:
        raise MatrixEncodingError(
            f"Error correction must be one of L, M, Q, H: {level!r}"
        )
    return level.upper()


class QRCodeMatrixSource:
    """Matrix source backed by the ``qrcode`` library.

    The smallest version that fits the data is chosen, and the mask pattern
    is selected automatically.
    """

    def encode(
        self, text: str, error_correction: str = DEFAULT_ERROR_CORRECTION
    ) -> ModuleMatrix:
        level = normalize_error_correction(error_correction)
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECTION_LEVELS[level],
            box_size=1,
            border=0,
        )
        try:
            qr.add_data(text)
            qr.make(fit=True)
        except (DataOverflowError, ValueError, TypeError) as e:
            raise MatrixEncodingError(f"QR code generation failed: {e}") from e

        matrix = ModuleMatrix.from_rows(qr.modules)
        logger.debug(
            f"Encoded {len(text)} characters at level {level}: "
            f"version {qr.version}, {matrix.size}x{matrix.size} modules"
        )
        return matrix


def encode_text(
    text: str,
    error_correction: str = DEFAULT_ERROR_CORRECTION,
    source: MatrixSource | None = None,
) -> ModuleMatrix:
    """Encode text with the given source, or the default ``qrcode`` source."""
    if source is None:
        source = QRCodeMatrixSource()
    return source.encode(text, error_correction)
