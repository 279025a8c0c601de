"""Logo compositing for raster canvases and vector documents.

The logo is scaled to a fraction of the canvas size and centered. Raster
output blends it over the pixels; vector output embeds it as a data URI.
"""

import dataclasses
import logging
import math
import os

from PIL import Image

from qr2svg import image_utils
from qr2svg.canvas import PixelCanvas
from qr2svg.errors import InvalidRatio, LogoDecodeError
from qr2svg.resource_limits import ResourceLimits
from qr2svg.svg_document import VectorDocument

logger = logging.getLogger(__name__)

DEFAULT_LOGO_SIZE_RATIO = 0.2

# Lanczos keeps small logos free of aliasing.
RESAMPLE_FILTER = Image.Resampling.LANCZOS

# Formats SVG renderers can decode from a data URI. Others are re-encoded.
EMBEDDABLE_FORMATS = ("PNG", "JPEG", "GIF", "WEBP")


@dataclasses.dataclass(frozen=True)
class LogoAsset:
    """Logo source: encoded bytes, a decoded image, or a file path.

    A path-only asset is what remains when the file could not be read. It
    can still be referenced from a vector document but not composited.
    """

    data: bytes | None = None
    image: Image.Image | None = None
    path: str | None = None

    @classmethod
    def load(
        cls, source: "LogoAsset | bytes | Image.Image | str | os.PathLike[str]"
    ) -> "LogoAsset":
        """Create an asset from bytes, a PIL image, or a path.

        Paths are read eagerly. A read failure is logged and the asset keeps
        only the path.
        """
        if isinstance(source, LogoAsset):
            return source
        if isinstance(source, (bytes, bytearray, memoryview)):
            return cls(data=bytes(source))
        if isinstance(source, Image.Image):
            return cls(image=source)
        if isinstance(source, (str, os.PathLike)):
            path = os.fspath(source)
            try:
                with open(path, "rb") as f:
                    return cls(data=f.read(), path=path)
            except OSError as e:
                logger.warning(f"Failed to read logo {path}: {e}")
                return cls(path=path)
        raise TypeError(f"Unsupported logo source: {type(source)}")

    @property
    def cache_token(self) -> bytes:
        """Bytes identifying this asset's content, for cache keys."""
        if self.data is not None:
            return self.data
        if self.image is not None:
            return self.image.tobytes() + repr((self.image.mode, self.image.size)).encode()
        return (self.path or "").encode("utf-8")

    def decode(self, limits: ResourceLimits | None = None) -> Image.Image:
        """Decode the asset into an RGBA image without touching the source.

        Raises:
            LogoDecodeError: If there is nothing to decode, the data exceeds
                the logo size limit, or it is not a supported image.
        """
        if self.image is not None:
            return self.image.convert("RGBA")
        return self._open(limits).convert("RGBA")

    def _open(self, limits: ResourceLimits | None) -> Image.Image:
        if self.data is None:
            raise LogoDecodeError(f"Logo could not be loaded from {self.path!r}")

        limits = limits or ResourceLimits.default()
        if limits.is_logo_size_limited() and len(self.data) > limits.max_logo_size:
            raise LogoDecodeError(
                f"Logo is {len(self.data)} bytes, exceeding the limit of "
                f"{limits.max_logo_size} bytes"
            )
        try:
            return image_utils.decode_image(self.data)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise LogoDecodeError(f"Failed to decode logo: {e}") from e

    def to_href(self, limits: ResourceLimits | None = None) -> str:
        """Return a data URI for the logo, or the raw path as a last resort."""
        if self.data is None and self.image is None:
            logger.warning(
                f"Embedding logo as raw path reference {self.path!r}; "
                "output will not be self-contained"
            )
            return self.path or ""
        if self.image is not None:
            return image_utils.encode_data_uri(
                image_utils.encode_image(self.image.convert("RGBA"), "PNG")
            )

        image = self._open(limits)
        if image.format in EMBEDDABLE_FORMATS:
            return image_utils.encode_data_uri(self.data, Image.MIME[image.format])
        logger.debug(f"Re-encoding {image.format} logo as PNG for embedding")
        return image_utils.encode_data_uri(
            image_utils.encode_image(image.convert("RGBA"), "PNG")
        )


def compute_logo_size(canvas_size: int, size_ratio: float) -> int:
    """Return the logo side length for a canvas.

    Raises:
        InvalidRatio: If the ratio is not positive, or the logo would be empty
            or would not fit inside the canvas.
    """
    if not size_ratio > 0:
        raise InvalidRatio(f"Logo size ratio must be positive: {size_ratio}")
    logo_size = math.floor(canvas_size * size_ratio)
    if logo_size >= canvas_size:
        raise InvalidRatio(
            f"Logo size {logo_size} does not fit in canvas of size {canvas_size}"
        )
    if logo_size == 0:
        raise InvalidRatio(
            f"Logo size ratio {size_ratio} is too small for canvas of size {canvas_size}"
        )
    return logo_size


def logo_offset(canvas_size: int, logo_size: int) -> int:
    """Offset that centers the logo, rounded toward zero."""
    return (canvas_size - logo_size) // 2


def overlay_raster(
    canvas: PixelCanvas,
    logo: "LogoAsset | bytes | Image.Image | str",
    size_ratio: float = DEFAULT_LOGO_SIZE_RATIO,
    limits: ResourceLimits | None = None,
) -> PixelCanvas:
    """Composite the logo centered over the canvas in place.

    Source-over blending is used, so transparent logo pixels leave the
    modules underneath visible. Pixels outside the logo are not touched.
    """
    canvas_size = min(canvas.width, canvas.height)
    logo_size = compute_logo_size(canvas_size, size_ratio)
    resized = LogoAsset.load(logo).decode(limits).resize(
        (logo_size, logo_size), RESAMPLE_FILTER
    )
    x = logo_offset(canvas.width, logo_size)
    y = logo_offset(canvas.height, logo_size)

    image = canvas.to_image()
    image.alpha_composite(resized, dest=(x, y))
    canvas.pixels[:, :] = PixelCanvas.from_image(image).pixels
    logger.debug(f"Composited {logo_size}x{logo_size} logo at ({x}, {y})")
    return canvas


def overlay_vector(
    document: VectorDocument,
    logo: "LogoAsset | bytes | Image.Image | str",
    size_ratio: float = DEFAULT_LOGO_SIZE_RATIO,
    limits: ResourceLimits | None = None,
) -> VectorDocument:
    """Append the logo to the document as a centered image reference."""
    canvas_size = int(min(document.width, document.height))
    logo_size = compute_logo_size(canvas_size, size_ratio)
    href = LogoAsset.load(logo).to_href(limits)
    x = logo_offset(int(document.width), logo_size)
    y = logo_offset(int(document.height), logo_size)
    document.add_image(href, x, y, logo_size, logo_size)
    logger.debug(f"Embedded {logo_size}x{logo_size} logo at ({x}, {y})")
    return document
