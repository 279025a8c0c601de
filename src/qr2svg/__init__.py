from logging import getLogger

from qr2svg.cache import RenderCache
from qr2svg.canvas import PixelCanvas
from qr2svg.color_utils import ColorPair, parse_hex_color
from qr2svg.convert import (
    convert_svg_to_jpeg,
    convert_svg_to_png,
    convert_svg_to_webp,
    svg_to_raster,
)
from qr2svg.errors import (
    EncodeError,
    InvalidColorFormat,
    InvalidGeometry,
    InvalidRatio,
    LogoDecodeError,
    MatrixEncodingError,
    QR2SVGError,
    RasterizeError,
)
from qr2svg.generator import QRCode, RenderRequest, RenderResult, generate_qr, render
from qr2svg.layout import LayoutGeometry
from qr2svg.logo import LogoAsset
from qr2svg.matrix import ModuleMatrix, QRCodeMatrixSource, encode_text
from qr2svg.rasterizer import BackgroundMode, ResvgRasterizer, rasterize
from qr2svg.resource_limits import ResourceLimits
from qr2svg.svg_document import VectorDocument
from qr2svg.version import __version__ as __version__

logger = getLogger(__name__)

__all__ = [
    "BackgroundMode",
    "ColorPair",
    "EncodeError",
    "InvalidColorFormat",
    "InvalidGeometry",
    "InvalidRatio",
    "LayoutGeometry",
    "LogoAsset",
    "LogoDecodeError",
    "MatrixEncodingError",
    "ModuleMatrix",
    "PixelCanvas",
    "QR2SVGError",
    "QRCode",
    "QRCodeMatrixSource",
    "RasterizeError",
    "RenderCache",
    "RenderRequest",
    "RenderResult",
    "ResourceLimits",
    "ResvgRasterizer",
    "VectorDocument",
    "convert_svg_to_jpeg",
    "convert_svg_to_png",
    "convert_svg_to_webp",
    "encode_text",
    "generate_qr",
    "parse_hex_color",
    "rasterize",
    "render",
    "svg_to_raster",
]
