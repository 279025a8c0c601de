"""Resvg-based rasterizer module.

This module provides SVG rasterization using the resvg library via resvg-py,
offering fast and accurate rendering with no external dependencies.
"""

import logging
from io import BytesIO

import resvg_py
from PIL import Image

from qr2svg.resource_limits import ResourceLimits

from .base_rasterizer import BaseRasterizer

logger = logging.getLogger(__name__)


class ResvgRasterizer(BaseRasterizer):
    """SVG rasterizer using resvg.

    Resvg is a fast, accurate SVG renderer written in Rust. Embedded images
    given as data URIs are decoded by resvg itself, so documents carrying a
    logo render without any file system access.

    Example:
        >>> rasterizer = ResvgRasterizer()
        >>> canvas = rasterizer.rasterize(document, width=480, height=480)
        >>> canvas = rasterizer.rasterize('<svg ...>...</svg>')
    """

    def __init__(self, limits: ResourceLimits | None = None, dpi: int = 0) -> None:
        """Initialize the resvg rasterizer.

        Args:
            limits: Resource limits for target dimensions.
            dpi: Dots per inch for rendering. If 0 (default), uses resvg's
                default of 96 DPI. Only affects documents using physical
                units; pixel sizes are fixed by the target size.
        """
        super().__init__(limits)
        self.dpi = dpi

    def _render(self, svg_content: str) -> Image.Image:
        png_bytes = resvg_py.svg_to_bytes(svg_string=svg_content, dpi=int(self.dpi))
        image = Image.open(BytesIO(bytes(png_bytes)))
        image.load()
        return image
