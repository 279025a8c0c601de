"""Standalone SVG to raster conversion.

These functions work on any SVG document, not only those produced by the QR
renderers.
"""

import logging
from typing import Union

from qr2svg import image_utils
from qr2svg.rasterizer import BackgroundMode, BaseRasterizer, ResvgRasterizer
from qr2svg.svg_document import VectorDocument

logger = logging.getLogger(__name__)


def svg_to_raster(
    svg: Union[VectorDocument, str, bytes],
    width: int | None = None,
    height: int | None = None,
    format: str = "png",
    quality: int | None = None,
    rasterizer: BaseRasterizer | None = None,
) -> bytes:
    """Rasterize an SVG document and encode it.

    Args:
        svg: SVG text or a VectorDocument.
        width: Target width in pixels. Defaults to twice the native width.
        height: Target height in pixels. Defaults to twice the native height.
        format: Output format: 'png', 'jpeg' or 'webp'.
        quality: JPEG quality, clamped to [1, 100]. Ignored for other formats.

    Returns:
        Encoded image bytes.

    Raises:
        RasterizeError: If the SVG cannot be parsed or rendered.
        EncodeError: If encoding fails.
    """
    format = image_utils.normalize_format(format)
    background_mode = (
        BackgroundMode.OPAQUE_WHITE if format == "jpeg" else BackgroundMode.TRANSPARENT
    )
    rasterizer = rasterizer or ResvgRasterizer()
    canvas = rasterizer.rasterize(
        svg, width=width, height=height, background_mode=background_mode
    )
    logger.debug(f"Rasterized SVG to {canvas.width}x{canvas.height} {format}")
    return image_utils.encode(canvas, format, quality)


def convert_svg_to_png(
    svg: Union[VectorDocument, str, bytes],
    width: int | None = None,
    height: int | None = None,
) -> bytes:
    return svg_to_raster(svg, width, height, format="png")


def convert_svg_to_jpeg(
    svg: Union[VectorDocument, str, bytes],
    width: int | None = None,
    height: int | None = None,
    quality: int | None = None,
) -> bytes:
    return svg_to_raster(svg, width, height, format="jpeg", quality=quality)


def convert_svg_to_webp(
    svg: Union[VectorDocument, str, bytes],
    width: int | None = None,
    height: int | None = None,
) -> bytes:
    """Convert SVG to lossless WebP. There is no lossy quality setting."""
    return svg_to_raster(svg, width, height, format="webp")
