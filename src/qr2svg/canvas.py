import dataclasses
import logging

import numpy as np
from PIL import Image

from qr2svg.color_utils import RGBA

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class PixelCanvas:
    """Mutable RGBA8 pixel buffer.

    ``pixels`` has shape ``(height, width, 4)`` and dtype ``uint8``. The
    declared ``width`` and ``height`` are kept separately so that encoders can
    reject a buffer that does not match them.
    """

    width: int
    height: int
    pixels: np.ndarray

    @classmethod
    def new(cls, width: int, height: int, color: RGBA) -> "PixelCanvas":
        """Allocate a canvas filled with a single color."""
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelCanvas":
        """Create a canvas from a PIL image, converting it to RGBA."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(width=image.width, height=image.height, pixels=np.array(image))

    def to_image(self) -> Image.Image:
        """Return a copy of the buffer as a PIL image in RGBA mode."""
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def fill_rect(self, x: int, y: int, width: int, height: int, color: RGBA) -> None:
        """Fill an axis-aligned rectangle, clipped to the canvas."""
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + width, self.width), min(y + height, self.height)
        if x0 < x1 and y0 < y1:
            self.pixels[y0:y1, x0:x1] = color

    def getpixel(self, x: int, y: int) -> RGBA:
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return (r, g, b, a)

    @property
    def has_transparency(self) -> bool:
        return bool((self.pixels[:, :, 3] < 255).any())
