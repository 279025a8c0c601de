import dataclasses
import logging
import os
import xml.etree.ElementTree as ET
from copy import deepcopy

from qr2svg import svg_utils
from qr2svg.color_utils import RGBA, rgb2str
from qr2svg.errors import RasterizeError

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class VectorDocument:
    """Append-only SVG document with a declared pixel size.

    The document holds, in drawing order, a background fill, any number of
    opaque rectangles and at most one embedded image reference.

    Example usage::

        from qr2svg.svg_document import VectorDocument

        document = VectorDocument.new(240, 240)
        document.add_background((255, 255, 255, 255))
        document.add_rect(20, 20, 9.5, 9.5, (0, 0, 0, 255))

        svg_string = document.tostring()
        document.save("output.svg")
    """

    svg: ET.Element
    width: float
    height: float

    @classmethod
    def new(cls, width: float, height: float) -> "VectorDocument":
        """Create an empty document of the given size."""
        svg = svg_utils.create_node(
            "svg",
            xmlns=svg_utils.NAMESPACE,
            width=width,
            height=height,
            viewBox=svg_utils.seq2str([0, 0, width, height], sep=" "),
        )
        return cls(svg=svg, width=width, height=height)

    @classmethod
    def fromstring(cls, data: str | bytes) -> "VectorDocument":
        """Parse SVG text and determine its native size.

        The size comes from the root ``width`` / ``height`` attributes when they
        are plain pixel lengths, falling back to the ``viewBox``.

        Raises:
            RasterizeError: If the text is not an SVG document or has no
                determinable size.
        """
        try:
            svg = svg_utils.fromstring(data)
        except ET.ParseError as e:
            raise RasterizeError(f"Failed to parse SVG: {e}") from e
        if svg_utils.local_name(svg.tag) != "svg":
            raise RasterizeError(f"Root element is not <svg>: {svg.tag}")

        viewbox = svg_utils.parse_viewbox(svg.get("viewBox"))
        width = svg_utils.parse_length(svg.get("width"))
        height = svg_utils.parse_length(svg.get("height"))
        if width is None and viewbox is not None:
            width = viewbox[2]
        if height is None and viewbox is not None:
            height = viewbox[3]
        if width is None or height is None or width <= 0 or height <= 0:
            raise RasterizeError("SVG document has no usable width and height")
        return cls(svg=svg, width=width, height=height)

    @property
    def has_image(self) -> bool:
        return any(
            svg_utils.local_name(node.tag) == "image" for node in self.svg.iter()
        )

    def add_background(self, color: RGBA) -> ET.Element:
        """Append a rectangle covering the whole document."""
        return svg_utils.create_node(
            "rect",
            parent=self.svg,
            width="100%",
            height="100%",
            fill=rgb2str(color),
            fill_opacity=_opacity(color),
        )

    def add_rect(
        self, x: float, y: float, width: float, height: float, color: RGBA
    ) -> ET.Element:
        """Append a filled rectangle."""
        return svg_utils.create_node(
            "rect",
            parent=self.svg,
            x=_coord(x),
            y=_coord(y),
            width=_coord(width),
            height=_coord(height),
            fill=rgb2str(color),
            fill_opacity=_opacity(color),
        )

    def add_image(
        self, href: str, x: float, y: float, width: float, height: float
    ) -> ET.Element:
        """Append the image reference. A document holds at most one.

        The image is stretched to fill the box, matching raster compositing.
        """
        if self.has_image:
            raise ValueError("Document already contains an image reference")
        return svg_utils.create_node(
            "image",
            parent=self.svg,
            x=_coord(x),
            y=_coord(y),
            width=_coord(width),
            height=_coord(height),
            href=href,
            preserveAspectRatio="none",
        )

    def tostring(self, indent: str = "") -> str:
        """Convert the document to SVG text."""
        return svg_utils.tostring(deepcopy(self.svg), indent=indent)

    def save(self, filepath: str, indent: str = "") -> None:
        """Save the document to an SVG file, creating parent directories."""
        dirname = os.path.dirname(filepath)
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            svg_utils.write(deepcopy(self.svg), f, indent=indent)


def _opacity(color: RGBA) -> float | None:
    """Return a fill-opacity value for translucent colors, else None."""
    if color[3] >= 255:
        return None
    return color[3] / 255


def _coord(value: float) -> str:
    """Format a coordinate with enough digits to keep adjacent modules seamless."""
    return svg_utils.num2str(value, digit=4)
