"""Tests for the vector renderer."""

import pytest

from qr2svg import layout, raster_renderer, vector_renderer
from qr2svg.color_utils import ColorPair
from qr2svg.errors import InvalidGeometry
from qr2svg.matrix import ModuleMatrix


class TestRender:
    def test_document_size(self, hello_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(hello_matrix.size, 200, 20)
        document = vector_renderer.render(hello_matrix, geometry)
        assert document.width == document.height == 240
        assert document.svg.get("width") == "240"
        assert document.svg.get("viewBox") == "0 0 240 240"

    def test_rect_count(self, hello_matrix: ModuleMatrix) -> None:
        """Test one rectangle per dark module plus the background."""
        geometry = layout.compute(hello_matrix.size, 200, 20)
        document = vector_renderer.render(hello_matrix, geometry)
        rects = document.svg.findall("rect")
        assert len(rects) == hello_matrix.dark_count() + 1
        assert not document.has_image

    def test_background_first(self, checker_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(4, 40, 5)
        colors = ColorPair.from_strings("#112233", "#445566")
        document = vector_renderer.render(checker_matrix, geometry, colors)
        background = list(document.svg)[0]
        assert background.get("width") == "100%"
        assert background.get("fill") == "rgb(17,34,51)"
        for rect in list(document.svg)[1:]:
            assert rect.get("fill") == "rgb(68,85,102)"

    def test_exact_module_size(self, hello_matrix: ModuleMatrix) -> None:
        """Test modules use the untruncated size and span the content area."""
        geometry = layout.compute(hello_matrix.size, 200, 20)
        document = vector_renderer.render(hello_matrix, geometry)
        rects = document.svg.findall("rect")[1:]

        assert rects[0].get("x") == "20"
        assert rects[0].get("y") == "20"
        assert float(rects[0].get("width")) == pytest.approx(200 / 21, abs=1e-4)

        # Bottom-left finder pattern reaches the bottom edge of the content.
        bottom = max(float(r.get("y")) + float(r.get("height")) for r in rects)
        assert bottom == pytest.approx(220, abs=1e-3)

    def test_same_cells_as_raster(self, hello_matrix: ModuleMatrix) -> None:
        """Test both renderers place modules for the same cells."""
        geometry = layout.compute(hello_matrix.size, 210, 10)
        document = vector_renderer.render(hello_matrix, geometry)
        canvas = raster_renderer.render(hello_matrix, geometry)

        # 210 divides evenly by 21, so coordinates coincide exactly.
        size = geometry.module_size
        for rect in document.svg.findall("rect")[1:]:
            x, y = int(rect.get("x")), int(rect.get("y"))
            assert rect.get("width") == str(size)
            assert canvas.getpixel(x, y) == (0, 0, 0, 255)
            assert canvas.getpixel(x + size - 1, y + size - 1) == (0, 0, 0, 255)

    def test_geometry_mismatch(self, checker_matrix: ModuleMatrix) -> None:
        geometry = layout.compute(21, 210, 0)
        with pytest.raises(InvalidGeometry):
            vector_renderer.render(checker_matrix, geometry)
