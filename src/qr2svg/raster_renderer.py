import logging

from qr2svg.canvas import PixelCanvas
from qr2svg.color_utils import ColorPair
from qr2svg.errors import InvalidGeometry
from qr2svg.layout import LayoutGeometry
from qr2svg.matrix import ModuleMatrix

logger = logging.getLogger(__name__)


def render(
    matrix: ModuleMatrix, geometry: LayoutGeometry, colors: ColorPair | None = None
) -> PixelCanvas:
    """Paint the module grid into a new opaque pixel canvas.

    Only dark cells are drawn; light cells and the residual strip left by
    module size truncation keep the background color.
    """
    if colors is None:
        colors = ColorPair()
    if geometry.module_count != matrix.size:
        raise InvalidGeometry(
            f"Geometry is for {geometry.module_count} modules, "
            f"matrix has {matrix.size}"
        )

    background = colors.background[:3] + (255,)
    canvas = PixelCanvas.new(geometry.canvas_size, geometry.canvas_size, background)
    for row, col in matrix.dark_cells():
        canvas.fill_rect(*geometry.module_rect(row, col), colors.foreground)

    logger.debug(
        f"Rendered {matrix.size}x{matrix.size} modules onto "
        f"{canvas.width}x{canvas.height} canvas"
    )
    return canvas
