"""Geometry shared by the raster and vector renderers."""

import dataclasses
import logging

from qr2svg.errors import InvalidGeometry

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class LayoutGeometry:
    """Pixel layout of a QR symbol on a square canvas.

    ``module_size`` is truncated from ``content_size / module_count``, so the
    modules may not fill the content area exactly. The leftover strip at the
    trailing edge keeps the background color.
    """

    module_size: int
    canvas_size: int
    margin: int
    module_count: int
    content_size: int

    @property
    def exact_module_size(self) -> float:
        """Untruncated module size used for vector output."""
        return self.content_size / self.module_count

    def module_rect(self, row: int, col: int) -> tuple[int, int, int, int]:
        """Return ``(x, y, width, height)`` of the raster module at a cell."""
        return (
            self.margin + col * self.module_size,
            self.margin + row * self.module_size,
            self.module_size,
            self.module_size,
        )

    def exact_module_rect(
        self, row: int, col: int
    ) -> tuple[float, float, float, float]:
        """Return ``(x, y, width, height)`` of the vector module at a cell."""
        size = self.exact_module_size
        return (self.margin + col * size, self.margin + row * size, size, size)


def compute(module_count: int, target_size: int, margin: int) -> LayoutGeometry:
    """Compute layout geometry for a matrix of ``module_count`` modules.

    Args:
        module_count: Side length of the module matrix.
        target_size: Size of the content area in pixels, excluding margins.
        margin: Quiet zone width in pixels on every side.

    Raises:
        InvalidGeometry: If any input is out of range, or the content area is
            smaller than one pixel per module.
    """
    if module_count <= 0:
        raise InvalidGeometry(f"Module count must be positive: {module_count}")
    if target_size <= 0:
        raise InvalidGeometry(f"Size must be positive: {target_size}")
    if margin < 0:
        raise InvalidGeometry(f"Margin must not be negative: {margin}")

    module_size = target_size // module_count
    if module_size == 0:
        raise InvalidGeometry(
            f"Size {target_size} is too small for {module_count} modules"
        )

    geometry = LayoutGeometry(
        module_size=module_size,
        canvas_size=target_size + 2 * margin,
        margin=margin,
        module_count=module_count,
        content_size=target_size,
    )
    residual = target_size - module_size * module_count
    if residual:
        logger.debug(f"Module size truncated, {residual}px residual strip")
    return geometry
