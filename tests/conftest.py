import io
import logging

import pytest
from PIL import Image

from qr2svg.matrix import ModuleMatrix, QRCodeMatrixSource

logger = logging.getLogger(__name__)


def encode_png(image: Image.Image) -> bytes:
    """Encode a PIL image as PNG bytes."""
    with io.BytesIO() as output:
        image.save(output, format="PNG")
        return output.getvalue()


@pytest.fixture
def hello_matrix() -> ModuleMatrix:
    """Matrix for "HELLO" at error correction level M."""
    return QRCodeMatrixSource().encode("HELLO", "M")


@pytest.fixture
def checker_matrix() -> ModuleMatrix:
    """Small 4x4 checkerboard with a dark top-left cell."""
    return ModuleMatrix.from_rows(
        [[(row + col) % 2 == 0 for col in range(4)] for row in range(4)]
    )


@pytest.fixture
def logo_image() -> Image.Image:
    """Opaque red square with a half-transparent blue center."""
    image = Image.new("RGBA", (64, 64), (255, 0, 0, 255))
    image.paste((0, 0, 255, 128), (16, 16, 48, 48))
    return image


@pytest.fixture
def logo_bytes(logo_image: Image.Image) -> bytes:
    return encode_png(logo_image)


@pytest.fixture
def simple_svg() -> str:
    """Simple SVG with two rectangles."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
    <rect width="100" height="100" fill="white"/>
    <rect x="25" y="25" width="50" height="50" fill="red"/>
</svg>"""


@pytest.fixture
def transparent_svg() -> str:
    """SVG that leaves everything outside one square uncovered."""
    return """<svg xmlns="http://www.w3.org/2000/svg" width="40" height="40">
    <rect x="10" y="10" width="20" height="20" fill="#0000ff"/>
</svg>"""
