"""Tests for ResvgRasterizer."""

import pytest
from PIL import Image

from qr2svg import layout, logo, vector_renderer
from qr2svg.errors import RasterizeError
from qr2svg.matrix import ModuleMatrix
from qr2svg.rasterizer import (
    SUPERSAMPLE_FACTOR,
    BackgroundMode,
    BaseRasterizer,
    ResvgRasterizer,
    rasterize,
)
from qr2svg.resource_limits import ResourceLimits
from qr2svg.svg_document import VectorDocument


def test_rasterizer_default_size(simple_svg: str) -> None:
    """Test the default target is the native size times the supersample factor."""
    canvas = ResvgRasterizer().rasterize(simple_svg)
    assert canvas.width == 100 * SUPERSAMPLE_FACTOR
    assert canvas.height == 100 * SUPERSAMPLE_FACTOR
    assert canvas.pixels.shape == (200, 200, 4)


def test_rasterizer_explicit_size(simple_svg: str) -> None:
    canvas = ResvgRasterizer().rasterize(simple_svg, width=64, height=64)
    assert (canvas.width, canvas.height) == (64, 64)
    assert canvas.getpixel(32, 32) == (255, 0, 0, 255)
    assert canvas.getpixel(2, 2) == (255, 255, 255, 255)


def test_rasterizer_non_uniform_scale(simple_svg: str) -> None:
    """Test independent horizontal and vertical scaling."""
    canvas = ResvgRasterizer().rasterize(simple_svg, width=50, height=80)
    assert (canvas.width, canvas.height) == (50, 80)
    # The red square covers 25..75 of 100 on each axis.
    assert canvas.getpixel(13, 40) == (255, 0, 0, 255)
    assert canvas.getpixel(36, 21) == (255, 0, 0, 255)
    assert canvas.getpixel(10, 40) == (255, 255, 255, 255)
    assert canvas.getpixel(25, 17) == (255, 255, 255, 255)


def test_rasterizer_one_dimension(simple_svg: str) -> None:
    canvas = ResvgRasterizer().rasterize(simple_svg, width=50)
    assert (canvas.width, canvas.height) == (50, 200)


def test_rasterizer_viewbox_only() -> None:
    svg = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 30 20">
    <rect width="30" height="20" fill="#00ff00"/>
</svg>"""
    canvas = ResvgRasterizer().rasterize(svg, width=60, height=40)
    assert (canvas.width, canvas.height) == (60, 40)
    assert canvas.getpixel(59, 39) == (0, 255, 0, 255)


def test_rasterizer_transparent_background(transparent_svg: str) -> None:
    canvas = ResvgRasterizer().rasterize(
        transparent_svg, background_mode=BackgroundMode.TRANSPARENT
    )
    assert (canvas.width, canvas.height) == (80, 80)
    assert canvas.getpixel(0, 0)[3] == 0
    assert canvas.getpixel(40, 40) == (0, 0, 255, 255)
    assert canvas.has_transparency


def test_rasterizer_opaque_background(transparent_svg: str) -> None:
    canvas = ResvgRasterizer().rasterize(
        transparent_svg, background_mode=BackgroundMode.OPAQUE_WHITE
    )
    assert canvas.getpixel(0, 0) == (255, 255, 255, 255)
    assert canvas.getpixel(40, 40) == (0, 0, 255, 255)
    assert not canvas.has_transparency


def test_rasterizer_document(hello_matrix: ModuleMatrix) -> None:
    """Test a rendered QR document classifies correctly at every module center."""
    geometry = layout.compute(hello_matrix.size, 200, 20)
    document = vector_renderer.render(hello_matrix, geometry)
    canvas = ResvgRasterizer().rasterize(
        document, geometry.canvas_size, geometry.canvas_size
    )
    assert (canvas.width, canvas.height) == (240, 240)

    size = geometry.exact_module_size
    for row in range(hello_matrix.size):
        for col in range(hello_matrix.size):
            x = int(geometry.margin + (col + 0.5) * size)
            y = int(geometry.margin + (row + 0.5) * size)
            expected = (0, 0, 0, 255) if hello_matrix.is_dark(row, col) else (255, 255, 255, 255)
            assert canvas.getpixel(x, y) == expected, (row, col)


def test_rasterizer_does_not_modify_document(hello_matrix: ModuleMatrix) -> None:
    geometry = layout.compute(hello_matrix.size, 200, 20)
    document = vector_renderer.render(hello_matrix, geometry)
    before = document.tostring()
    ResvgRasterizer().rasterize(document, 100, 50)
    assert document.tostring() == before


def test_rasterizer_embedded_logo(logo_bytes: bytes) -> None:
    """Test a data URI logo is decoded by the renderer."""
    document = VectorDocument.new(100, 100)
    document.add_background((255, 255, 255, 255))
    logo.overlay_vector(document, logo_bytes, 0.5)
    canvas = ResvgRasterizer().rasterize(document, 100, 100)
    assert canvas.getpixel(30, 30) == (255, 0, 0, 255)
    assert canvas.getpixel(5, 5) == (255, 255, 255, 255)


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-5, 10)])
def test_rasterizer_invalid_size(simple_svg: str, width: int, height: int) -> None:
    with pytest.raises(RasterizeError):
        ResvgRasterizer().rasterize(simple_svg, width, height)


def test_rasterizer_dimension_limit(simple_svg: str) -> None:
    rasterizer = ResvgRasterizer(limits=ResourceLimits(max_image_dimension=150))
    rasterizer.rasterize(simple_svg, 150, 150)
    with pytest.raises(RasterizeError):
        rasterizer.rasterize(simple_svg, 151, 10)
    with pytest.raises(RasterizeError):
        rasterizer.rasterize(simple_svg)  # default 200x200


def test_rasterizer_invalid_svg() -> None:
    with pytest.raises(RasterizeError):
        ResvgRasterizer().rasterize("<not-svg/>")


def test_rasterize_function(simple_svg: str) -> None:
    canvas = rasterize(simple_svg, 20, 30, BackgroundMode.OPAQUE_WHITE)
    assert (canvas.width, canvas.height) == (20, 30)


class TestBaseRasterizer:
    """Tests for behavior shared by all rasterizer backends."""

    def test_render_failure(self, simple_svg: str) -> None:
        class FailingRasterizer(BaseRasterizer):
            def _render(self, svg_content: str) -> Image.Image:
                raise RuntimeError("backend crashed")

        with pytest.raises(RasterizeError, match="backend crashed"):
            FailingRasterizer().rasterize(simple_svg)

    def test_resize_to_target(self, simple_svg: str) -> None:
        class FixedSizeRasterizer(BaseRasterizer):
            def _render(self, svg_content: str) -> Image.Image:
                return Image.new("RGBA", (7, 7), (0, 128, 0, 255))

        canvas = FixedSizeRasterizer().rasterize(simple_svg, 30, 20)
        assert (canvas.width, canvas.height) == (30, 20)
        assert canvas.getpixel(29, 19) == (0, 128, 0, 255)

    def test_prepared_svg(self, transparent_svg: str) -> None:
        prepared = []

        class RecordingRasterizer(BaseRasterizer):
            def _render(self, svg_content: str) -> Image.Image:
                prepared.append(svg_content)
                return Image.new("RGBA", (60, 90))

        RecordingRasterizer().rasterize(transparent_svg, 60, 90)
        assert 'width="60"' in prepared[0]
        assert 'height="90"' in prepared[0]
        assert 'viewBox="0 0 40 40"' in prepared[0]
        assert 'preserveAspectRatio="none"' in prepared[0]
        assert 'shape-rendering="crispEdges"' in prepared[0]
