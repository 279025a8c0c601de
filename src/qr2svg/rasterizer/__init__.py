"""Rasterizer module for converting vector documents to pixel canvases.

This module provides the ResvgRasterizer, which renders SVG documents with
the resvg engine at an arbitrary target resolution.
"""

from typing import Union

from qr2svg.canvas import PixelCanvas
from qr2svg.resource_limits import ResourceLimits
from qr2svg.svg_document import VectorDocument

from .base_rasterizer import SUPERSAMPLE_FACTOR, BackgroundMode, BaseRasterizer
from .resvg_rasterizer import ResvgRasterizer

__all__ = [
    "SUPERSAMPLE_FACTOR",
    "BackgroundMode",
    "BaseRasterizer",
    "ResvgRasterizer",
    "rasterize",
]


def rasterize(
    document: Union[VectorDocument, str, bytes],
    width: int | None = None,
    height: int | None = None,
    background_mode: BackgroundMode = BackgroundMode.TRANSPARENT,
    limits: ResourceLimits | None = None,
) -> PixelCanvas:
    """Rasterize a document with the default resvg backend."""
    return ResvgRasterizer(limits=limits).rasterize(
        document, width=width, height=height, background_mode=background_mode
    )
