"""Tests for the raster renderer."""

import numpy as np
import pytest

from qr2svg import layout, raster_renderer
from qr2svg.color_utils import ColorPair
from qr2svg.errors import InvalidGeometry
from qr2svg.matrix import ModuleMatrix


class TestRender:
    def test_canvas_size_and_opacity(self, hello_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(hello_matrix.size, 200, 20)
        canvas = raster_renderer.render(hello_matrix, geometry)
        assert canvas.width == canvas.height == 240
        assert canvas.pixels.shape == (240, 240, 4)
        assert not canvas.has_transparency

    def test_module_pixels(self, checker_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(4, 40, 5)
        colors = ColorPair(background=(255, 255, 255, 255), foreground=(0, 0, 255, 255))
        canvas = raster_renderer.render(checker_matrix, geometry, colors)

        for row in range(4):
            for col in range(4):
                x, y, size, _ = geometry.module_rect(row, col)
                expected = colors.foreground if checker_matrix.is_dark(row, col) else colors.background
                block = canvas.pixels[y : y + size, x : x + size]
                assert (block == expected).all()

    def test_margin_is_background(self, checker_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(4, 40, 5)
        canvas = raster_renderer.render(checker_matrix, geometry)
        assert (canvas.pixels[:5, :] == (255, 255, 255, 255)).all()
        assert (canvas.pixels[:, :5] == (255, 255, 255, 255)).all()
        assert (canvas.pixels[-5:, :] == (255, 255, 255, 255)).all()

    def test_residual_strip_is_background(self) -> None:
        """Test the strip left by truncation is not painted."""
        matrix = ModuleMatrix(np.ones((3, 3), dtype=bool))
        geometry = layout.compute(3, 10, 0)  # module_size 3, residual 1px
        canvas = raster_renderer.render(matrix, geometry)
        assert (canvas.pixels[:9, :9] == (0, 0, 0, 255)).all()
        assert (canvas.pixels[9, :] == (255, 255, 255, 255)).all()
        assert (canvas.pixels[:, 9] == (255, 255, 255, 255)).all()

    def test_translucent_background_forced_opaque(self, checker_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(4, 8, 1)
        colors = ColorPair(background=(10, 20, 30, 0))
        canvas = raster_renderer.render(checker_matrix, geometry, colors)
        assert canvas.getpixel(0, 0) == (10, 20, 30, 255)

    def test_geometry_mismatch(self, checker_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(5, 50, 0)
        with pytest.raises(InvalidGeometry):
            raster_renderer.render(checker_matrix, geometry)

    def test_new_canvas_each_call(self, checker_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(4, 40, 0)
        first = raster_renderer.render(checker_matrix, geometry)
        second = raster_renderer.render(checker_matrix, geometry)
        first.pixels[:] = 0
        assert second.getpixel(0, 0) == (0, 0, 0, 255)
        assert second.getpixel(15, 0) == (255, 255, 255, 255)
