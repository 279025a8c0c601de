"""Tests for layout geometry."""

import pytest

from qr2svg import layout
from qr2svg.errors import InvalidGeometry


class TestCompute:
    """Tests for layout.compute."""

    def test_default_request(self) -> None:
        """Test 21 modules at size 200 with margin 20."""
        geometry = layout.compute(21, 200, 20)
        assert geometry.module_size == 9
        assert geometry.canvas_size == 240
        assert geometry.margin == 20
        assert geometry.content_size == 200

    @pytest.mark.parametrize(
        "module_count,target_size,margin",
        [(1, 1, 0), (21, 21, 0), (21, 200, 20), (25, 1000, 3), (177, 500, 40)],
    )
    def test_module_size_and_canvas_size(
        self, module_count: int, target_size: int, margin: int
    ) -> None:
        """Test module size is at least one and canvas adds both margins."""
        geometry = layout.compute(module_count, target_size, margin)
        assert geometry.module_size >= 1
        assert geometry.module_size == target_size // module_count
        assert geometry.canvas_size == target_size + 2 * margin

    def test_zero_margin(self) -> None:
        geometry = layout.compute(21, 210, 0)
        assert geometry.canvas_size == 210
        assert geometry.module_size == 10

    @pytest.mark.parametrize(
        "module_count,target_size,margin",
        [(0, 200, 20), (-1, 200, 20), (21, 0, 20), (21, -5, 20), (21, 20, 20), (21, 200, -1)],
    )
    def test_invalid_inputs(
        self, module_count: int, target_size: int, margin: int
    ) -> None:
        with pytest.raises(InvalidGeometry):
            layout.compute(module_count, target_size, margin)

    def test_invalid_geometry_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            layout.compute(0, 200, 20)

    def test_deterministic(self) -> None:
        assert layout.compute(29, 300, 10) == layout.compute(29, 300, 10)


class TestModuleRects:
    """Tests for module rectangle helpers."""

    def test_module_rect_truncates(self) -> None:
        geometry = layout.compute(21, 200, 20)
        assert geometry.module_rect(0, 0) == (20, 20, 9, 9)
        assert geometry.module_rect(2, 3) == (20 + 3 * 9, 20 + 2 * 9, 9, 9)

    def test_exact_module_rect(self) -> None:
        geometry = layout.compute(21, 200, 20)
        x, y, width, height = geometry.exact_module_rect(20, 20)
        assert width == pytest.approx(200 / 21)
        assert x + width == pytest.approx(220)
        assert y + height == pytest.approx(220)

    def test_residual_strip(self) -> None:
        """Test truncated modules leave room before the trailing margin."""
        geometry = layout.compute(21, 200, 20)
        x, _, width, _ = geometry.module_rect(0, 20)
        assert x + width == 209
        assert x + width < geometry.margin + geometry.content_size
