import enum
import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Union

from PIL import Image

from qr2svg import svg_utils
from qr2svg.canvas import PixelCanvas
from qr2svg.errors import RasterizeError
from qr2svg.resource_limits import ResourceLimits
from qr2svg.svg_document import VectorDocument

logger = logging.getLogger(__name__)

# Output scale used when no target size is requested.
SUPERSAMPLE_FACTOR = 2


class BackgroundMode(enum.Enum):
    """How uncovered areas of the document are filled."""

    TRANSPARENT = "transparent"  # PNG, WebP
    OPAQUE_WHITE = "opaque_white"  # JPEG has no alpha channel


class BaseRasterizer(ABC):
    """Base class for SVG rasterizer implementations.

    This abstract base class turns a vector document into a pixel canvas at
    a chosen resolution. Subclasses implement `_render` to produce an RGBA
    image from prepared SVG text.
    """

    def __init__(self, limits: ResourceLimits | None = None) -> None:
        self.limits = limits or ResourceLimits.default()

    def rasterize(
        self,
        document: Union[VectorDocument, str, bytes],
        width: int | None = None,
        height: int | None = None,
        background_mode: BackgroundMode = BackgroundMode.TRANSPARENT,
    ) -> PixelCanvas:
        """Rasterize a document to a pixel canvas.

        Args:
            document: VectorDocument or SVG text.
            width: Target width in pixels. Defaults to the native width times
                SUPERSAMPLE_FACTOR.
            height: Target height in pixels. Defaults to the native height
                times SUPERSAMPLE_FACTOR.
            background_mode: TRANSPARENT keeps alpha; OPAQUE_WHITE composites
                the result over white.

        Returns:
            PixelCanvas of exactly ``width`` x ``height`` pixels.

        Raises:
            RasterizeError: If the target size is invalid or too large, or the
                document cannot be parsed or painted.
        """
        if not isinstance(document, VectorDocument):
            document = VectorDocument.fromstring(document)

        target_width, target_height = self._target_size(document, width, height)
        svg = self._prepare_svg(document, target_width, target_height)
        try:
            image = self._render(svg)
        except RasterizeError:
            raise
        except Exception as e:
            raise RasterizeError(f"Failed to render SVG: {e}") from e

        if image.size != (target_width, target_height):
            logger.debug(
                f"Renderer returned {image.size[0]}x{image.size[1]}, "
                f"resizing to {target_width}x{target_height}"
            )
            image = image.resize((target_width, target_height), Image.Resampling.NEAREST)

        image = self._composite_background(image, background_mode)
        return PixelCanvas.from_image(image)

    @abstractmethod
    def _render(self, svg_content: str) -> Image.Image:
        """Render prepared SVG text to an RGBA image.

        This is the primary method that subclasses must implement to provide
        the actual rasterization logic.
        """
        raise NotImplementedError

    def _target_size(
        self, document: VectorDocument, width: int | None, height: int | None
    ) -> tuple[int, int]:
        target_width = (
            int(round(document.width * SUPERSAMPLE_FACTOR)) if width is None else width
        )
        target_height = (
            int(round(document.height * SUPERSAMPLE_FACTOR))
            if height is None
            else height
        )
        if target_width <= 0 or target_height <= 0:
            raise RasterizeError(
                f"Cannot allocate {target_width}x{target_height} pixel buffer"
            )
        limit = self.limits.max_image_dimension
        if self.limits.is_image_dimension_limited() and max(
            target_width, target_height
        ) > limit:
            raise RasterizeError(
                f"Target size {target_width}x{target_height} exceeds the "
                f"maximum dimension of {limit}px"
            )
        return target_width, target_height

    def _prepare_svg(
        self, document: VectorDocument, width: int, height: int
    ) -> str:
        """Scale the document to the target size with crisp edges.

        The native size becomes the viewBox and ``preserveAspectRatio="none"``
        allows independent horizontal and vertical scale factors.
        """
        svg = deepcopy(document.svg)
        if svg.get("viewBox") is None:
            svg.set(
                "viewBox",
                svg_utils.seq2str([0, 0, document.width, document.height], sep=" "),
            )
        svg.set("width", str(width))
        svg.set("height", str(height))
        svg.set("preserveAspectRatio", "none")
        # No anti-aliasing keeps module boundaries sharp at small sizes.
        svg.set("shape-rendering", "crispEdges")
        return svg_utils.tostring(svg, indent="")

    def _composite_background(
        self, image: Image.Image, background_mode: BackgroundMode
    ) -> Image.Image:
        """Composite image onto the background selected by the mode.

        A fully transparent base normalizes alpha; an opaque white base
        resolves all transparency for formats without an alpha channel.
        """
        if background_mode is BackgroundMode.OPAQUE_WHITE:
            color = (255, 255, 255, 255)
        else:
            color = (255, 255, 255, 0)
        background = Image.new("RGBA", size=image.size, color=color)
        background.alpha_composite(image.convert("RGBA"))
        return background
