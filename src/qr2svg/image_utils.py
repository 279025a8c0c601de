import base64
import io
import logging

import numpy as np
from PIL import Image

from qr2svg.canvas import PixelCanvas
from qr2svg.color_utils import clip_int
from qr2svg.errors import EncodeError

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 90

SUPPORTED_FORMATS = ("png", "jpeg", "webp")

FORMAT_ALIASES = {"jpg": "jpeg"}


def normalize_format(format: str) -> str:
    """Return the canonical lower-case name of a raster format."""
    name = format.lower().lstrip(".")
    name = FORMAT_ALIASES.get(name, name)
    if name not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported image format: {format}")
    return name


def clamp_quality(quality: int | None) -> int:
    """Clamp a JPEG quality to ``[1, 100]``, defaulting to 90."""
    if quality is None:
        return DEFAULT_JPEG_QUALITY
    return clip_int(quality, 1, 100)


def _check_canvas(canvas: PixelCanvas) -> None:
    if canvas.width <= 0 or canvas.height <= 0:
        raise EncodeError(f"Invalid canvas size: {canvas.width}x{canvas.height}")
    pixels = canvas.pixels
    if pixels.ndim != 3 or pixels.shape != (canvas.height, canvas.width, 4):
        raise EncodeError(
            f"Pixel buffer of shape {pixels.shape} does not match "
            f"{canvas.width}x{canvas.height} RGBA"
        )
    if pixels.dtype != np.uint8:
        raise EncodeError(f"Pixel buffer must be uint8, got {pixels.dtype}")


def _save(image: Image.Image, format: str, **params) -> bytes:
    with io.BytesIO() as output:
        try:
            image.save(output, format=format, **params)
        except (OSError, ValueError) as e:
            raise EncodeError(f"Failed to encode {format}: {e}") from e
        return output.getvalue()


def encode_png(canvas: PixelCanvas) -> bytes:
    """Encode a canvas as lossless PNG with alpha."""
    _check_canvas(canvas)
    return _save(canvas.to_image(), "PNG")


def encode_jpeg(canvas: PixelCanvas, quality: int | None = None) -> bytes:
    """Encode a canvas as JPEG.

    Only the R, G and B bytes of each pixel are kept. Transparency must be
    resolved to an opaque background before calling this.
    """
    _check_canvas(canvas)
    quality = clamp_quality(quality)
    rgb = np.ascontiguousarray(canvas.pixels[:, :, :3])
    return _save(Image.fromarray(rgb), "JPEG", quality=quality)


def encode_webp(canvas: PixelCanvas) -> bytes:
    """Encode a canvas as lossless WebP with alpha.

    ``exact`` keeps the RGB values of fully transparent pixels so that a
    decode returns the same buffer.
    """
    _check_canvas(canvas)
    return _save(canvas.to_image(), "WEBP", lossless=True, exact=True)


def encode(canvas: PixelCanvas, format: str = "png", quality: int | None = None) -> bytes:
    """Encode a canvas in the named format."""
    format = normalize_format(format)
    logger.debug(f"Encoding {canvas.width}x{canvas.height} canvas as {format}")
    if format == "jpeg":
        return encode_jpeg(canvas, quality)
    if format == "webp":
        return encode_webp(canvas)
    return encode_png(canvas)


def encode_image(image: Image.Image, format: str = "PNG") -> bytes:
    """Encode a PIL image to bytes in the specified format."""
    with io.BytesIO() as output:
        image.save(output, format=format.upper())
        return output.getvalue()


def encode_data_uri(data: bytes, mime_type: str = "image/png") -> str:
    """Encode image bytes as a base64 data URI."""
    base64_data = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{base64_data}"


def decode_image(data: bytes, mode: str | None = None) -> Image.Image:
    """Decode image data from bytes to a PIL image."""
    with io.BytesIO(data) as input:
        image = Image.open(input)
        image.load()
    if mode is not None:
        return image.convert(mode)
    return image

