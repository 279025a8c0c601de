import logging

from qr2svg.color_utils import ColorPair
from qr2svg.errors import InvalidGeometry
from qr2svg.layout import LayoutGeometry
from qr2svg.matrix import ModuleMatrix
from qr2svg.svg_document import VectorDocument

logger = logging.getLogger(__name__)


def render(
    matrix: ModuleMatrix, geometry: LayoutGeometry, colors: ColorPair | None = None
) -> VectorDocument:
    """Describe the module grid as an SVG document.

    Module rectangles use the untruncated module size, so the symbol always
    spans the full content area. The raster renderer truncates instead, and
    the two outputs are not pixel-identical for sizes that do not divide
    evenly.
    """
    if colors is None:
        colors = ColorPair()
    if geometry.module_count != matrix.size:
        raise InvalidGeometry(
            f"Geometry is for {geometry.module_count} modules, "
            f"matrix has {matrix.size}"
        )

    document = VectorDocument.new(geometry.canvas_size, geometry.canvas_size)
    document.add_background(colors.background)
    for row, col in matrix.dark_cells():
        document.add_rect(*geometry.exact_module_rect(row, col), colors.foreground)

    logger.debug(
        f"Described {matrix.dark_count()} dark modules in "
        f"{geometry.canvas_size}x{geometry.canvas_size} document"
    )
    return document
