import dataclasses
import logging
import os
from typing import Any, Sequence

from qr2svg import image_utils, layout, logo, raster_renderer, vector_renderer
from qr2svg.cache import RenderCache, make_key
from qr2svg.color_utils import ColorPair
from qr2svg.errors import InvalidGeometry
from qr2svg.logo import DEFAULT_LOGO_SIZE_RATIO, LogoAsset
from qr2svg.matrix import (
    DEFAULT_ERROR_CORRECTION,
    MatrixSource,
    ModuleMatrix,
    encode_text,
    normalize_error_correction,
)
from qr2svg.rasterizer import BackgroundMode, BaseRasterizer, ResvgRasterizer
from qr2svg.resource_limits import ResourceLimits

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 200
DEFAULT_MARGIN = 20
DEFAULT_OUTPUTS = ("svg", "png")


@dataclasses.dataclass(frozen=True)
class RenderRequest:
    """Everything needed to render one QR code.

    Either ``text`` or a pre-built ``matrix`` must be given. ``outputs`` names
    the formats to produce, any of ``svg``, ``png``, ``jpeg`` and ``webp``.
    """

    text: str | None = None
    size: int = DEFAULT_SIZE
    margin: int = DEFAULT_MARGIN
    logo: Any = None
    logo_size_ratio: float = DEFAULT_LOGO_SIZE_RATIO
    background_color: str | None = None
    foreground_color: str | None = None
    error_correction: str = DEFAULT_ERROR_CORRECTION
    outputs: Sequence[str] = DEFAULT_OUTPUTS
    quality: int = image_utils.DEFAULT_JPEG_QUALITY
    matrix: ModuleMatrix | None = None


@dataclasses.dataclass
class RenderResult:
    """Rendered outputs. Formats that were not requested are None."""

    width: int
    height: int
    svg: str | None = None
    png: bytes | None = None
    jpeg: bytes | None = None
    webp: bytes | None = None


def _normalize_outputs(outputs: Sequence[str]) -> list[str]:
    kinds = []
    for output in outputs:
        kind = "svg" if output.lower() == "svg" else image_utils.normalize_format(output)
        if kind not in kinds:
            kinds.append(kind)
    if not kinds:
        raise ValueError("At least one output kind must be requested")
    return kinds


def render(
    request: RenderRequest,
    source: MatrixSource | None = None,
    rasterizer: BaseRasterizer | None = None,
    limits: ResourceLimits | None = None,
) -> RenderResult:
    """Run the full pipeline for one request.

    Inputs, including the canvas size against the dimension limit, are
    validated before anything is drawn. SVG output comes from the vector
    renderer and PNG from the raster renderer. JPEG and WebP rasterize the
    vector document at canvas size, with an opaque white background for JPEG
    and a transparent one for WebP.
    """
    kinds = _normalize_outputs(request.outputs)
    colors = ColorPair.from_strings(request.background_color, request.foreground_color)
    level = normalize_error_correction(request.error_correction)
    limits = limits or ResourceLimits.default()

    matrix = request.matrix
    if matrix is None:
        if request.text is None:
            raise ValueError("Either text or matrix must be given")
        matrix = encode_text(request.text, level, source=source)
    geometry = layout.compute(matrix.size, request.size, request.margin)
    if (
        limits.is_image_dimension_limited()
        and geometry.canvas_size > limits.max_image_dimension
    ):
        raise InvalidGeometry(
            f"Canvas size {geometry.canvas_size} exceeds the maximum dimension "
            f"of {limits.max_image_dimension}px"
        )
    asset = LogoAsset.load(request.logo) if request.logo is not None else None

    result = RenderResult(width=geometry.canvas_size, height=geometry.canvas_size)

    if {"svg", "jpeg", "webp"} & set(kinds):
        document = vector_renderer.render(matrix, geometry, colors)
        if asset is not None:
            logo.overlay_vector(document, asset, request.logo_size_ratio, limits)
        if "svg" in kinds:
            result.svg = document.tostring()
        if "jpeg" in kinds or "webp" in kinds:
            rasterizer = rasterizer or ResvgRasterizer(limits=limits)
        if "jpeg" in kinds:
            canvas = rasterizer.rasterize(
                document,
                geometry.canvas_size,
                geometry.canvas_size,
                BackgroundMode.OPAQUE_WHITE,
            )
            result.jpeg = image_utils.encode_jpeg(canvas, request.quality)
        if "webp" in kinds:
            canvas = rasterizer.rasterize(
                document,
                geometry.canvas_size,
                geometry.canvas_size,
                BackgroundMode.TRANSPARENT,
            )
            result.webp = image_utils.encode_webp(canvas)

    if "png" in kinds:
        canvas = raster_renderer.render(matrix, geometry, colors)
        if asset is not None:
            logo.overlay_raster(canvas, asset, request.logo_size_ratio, limits)
        result.png = image_utils.encode_png(canvas)

    logger.debug(
        f"Rendered {', '.join(kinds)} at {result.width}x{result.height}"
    )
    return result


def generate_qr(
    text: str,
    size: int = DEFAULT_SIZE,
    margin: int = DEFAULT_MARGIN,
    logo: Any = None,
    logo_size_ratio: float = DEFAULT_LOGO_SIZE_RATIO,
    background_color: str | None = None,
    foreground_color: str | None = None,
    error_correction: str = DEFAULT_ERROR_CORRECTION,
    outputs: Sequence[str] = DEFAULT_OUTPUTS,
    quality: int = image_utils.DEFAULT_JPEG_QUALITY,
) -> RenderResult:
    """Convenience method to render a QR code in one call.

    Args:
        text: Text to encode.
        size: Size of the symbol area in pixels, excluding margins.
        margin: Quiet zone in pixels on each side.
        logo: Optional logo as bytes, a PIL image or a file path.
        logo_size_ratio: Logo side length as a fraction of the canvas size.
        background_color: ``#RRGGBB`` background, white by default.
        foreground_color: ``#RRGGBB`` module color, black by default.
        error_correction: One of ``L``, ``M``, ``Q``, ``H``.
        outputs: Formats to produce: ``svg``, ``png``, ``jpeg``, ``webp``.
        quality: JPEG quality, clamped to [1, 100].

    Returns:
        RenderResult with the requested outputs and the canvas size.
    """
    request = RenderRequest(
        text=text,
        size=size,
        margin=margin,
        logo=logo,
        logo_size_ratio=logo_size_ratio,
        background_color=background_color,
        foreground_color=foreground_color,
        error_correction=error_correction,
        outputs=tuple(outputs),
        quality=quality,
    )
    return render(request)


class QRCode:
    """QR code renderer with chainable configuration.

    Example usage::

        from qr2svg import QRCode

        qr = QRCode("https://example.com").set_size(400).set_logo("logo.png")
        svg = qr.to_svg()
        png = qr.to_png()
        qr.save("out/qr.jpg", quality=85)

    Pass a ``RenderCache`` to reuse outputs for unchanged options.
    """

    def __init__(
        self,
        text: str,
        size: int = DEFAULT_SIZE,
        margin: int = DEFAULT_MARGIN,
        logo: Any = None,
        logo_size_ratio: float = DEFAULT_LOGO_SIZE_RATIO,
        background_color: str | None = None,
        foreground_color: str | None = None,
        error_correction: str = DEFAULT_ERROR_CORRECTION,
        cache: RenderCache | None = None,
        source: MatrixSource | None = None,
        rasterizer: BaseRasterizer | None = None,
        limits: ResourceLimits | None = None,
    ) -> None:
        self.text = text
        self.size = size
        self.margin = margin
        self.logo = LogoAsset.load(logo) if logo is not None else None
        self.logo_size_ratio = logo_size_ratio
        self.background_color = background_color
        self.foreground_color = foreground_color
        self.error_correction = error_correction
        self.cache = cache
        self.source = source
        self.rasterizer = rasterizer
        self.limits = limits

    def set_size(self, size: int) -> "QRCode":
        self.size = size
        return self

    def set_margin(self, margin: int) -> "QRCode":
        self.margin = margin
        return self

    def set_logo(self, logo: Any, size_ratio: float | None = None) -> "QRCode":
        """Set the logo. A path is read once here, not on every render."""
        self.logo = LogoAsset.load(logo) if logo is not None else None
        if size_ratio is not None:
            self.logo_size_ratio = size_ratio
        return self

    def set_colors(
        self, background_color: str | None, foreground_color: str | None
    ) -> "QRCode":
        self.background_color = background_color
        self.foreground_color = foreground_color
        return self

    def set_error_correction(self, level: str) -> "QRCode":
        self.error_correction = level
        return self

    def request(
        self,
        outputs: Sequence[str] = DEFAULT_OUTPUTS,
        quality: int = image_utils.DEFAULT_JPEG_QUALITY,
    ) -> RenderRequest:
        """Snapshot the current options into a render request."""
        return RenderRequest(
            text=self.text,
            size=self.size,
            margin=self.margin,
            logo=self.logo,
            logo_size_ratio=self.logo_size_ratio,
            background_color=self.background_color,
            foreground_color=self.foreground_color,
            error_correction=self.error_correction,
            outputs=tuple(outputs),
            quality=quality,
        )

    def cache_key(self, kind: str) -> str:
        """Return the cache key for an output kind such as ``png`` or ``jpeg-90``."""
        options = {
            "text": self.text,
            "size": self.size,
            "margin": self.margin,
            "logo_size_ratio": self.logo_size_ratio if self.logo is not None else None,
            "background_color": self.background_color,
            "foreground_color": self.foreground_color,
            "error_correction": normalize_error_correction(self.error_correction),
        }
        extra = LogoAsset.load(self.logo).cache_token if self.logo is not None else b""
        return make_key(options, kind, extra)

    def generate(
        self,
        outputs: Sequence[str] = DEFAULT_OUTPUTS,
        quality: int = image_utils.DEFAULT_JPEG_QUALITY,
    ) -> RenderResult:
        """Render the requested outputs without consulting the cache."""
        return render(
            self.request(outputs, quality),
            source=self.source,
            rasterizer=self.rasterizer,
            limits=self.limits,
        )

    def _cached(self, kind: str, output: str, quality: int) -> Any:
        if self.cache is None:
            return getattr(self.generate((output,), quality), output)
        key = self.cache_key(kind)
        value = self.cache.get(key)
        if value is None:
            value = getattr(self.generate((output,), quality), output)
            self.cache.set(key, value)
        return value

    def to_svg(self) -> str:
        return self._cached("svg", "svg", image_utils.DEFAULT_JPEG_QUALITY)

    def to_png(self) -> bytes:
        return self._cached("png", "png", image_utils.DEFAULT_JPEG_QUALITY)

    def to_jpeg(self, quality: int | None = None) -> bytes:
        quality = image_utils.clamp_quality(quality)
        return self._cached(f"jpeg-{quality}", "jpeg", quality)

    def to_webp(self) -> bytes:
        return self._cached("webp", "webp", image_utils.DEFAULT_JPEG_QUALITY)

    def save(
        self, filepath: str, format: str | None = None, quality: int | None = None
    ) -> None:
        """Save the QR code to a file, creating parent directories.

        The format is taken from the file extension unless given explicitly.
        """
        if format is None:
            format = os.path.splitext(filepath)[1]
            if not format:
                raise ValueError(f"Cannot infer format from {filepath!r}")
        if format.lower().lstrip(".") == "svg":
            kind = "svg"
        else:
            kind = image_utils.normalize_format(format)

        dirname = os.path.dirname(filepath)
        if dirname:
            os.makedirs(dirname, exist_ok=True)

        if kind == "svg":
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(self.to_svg())
            return
        if kind == "jpeg":
            data = self.to_jpeg(quality)
        elif kind == "webp":
            data = self.to_webp()
        else:
            data = self.to_png()
        with open(filepath, "wb") as f:
            f.write(data)
        logger.debug(f"Saved {kind} to {filepath}")
