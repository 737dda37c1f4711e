"""Tests for illustration layouts."""

import pytest

from storyvid.layout import DEFAULT_LAYOUT, LAYOUT_TYPES, LayoutPosition, get_layout_config


class TestGetLayoutConfig:
    """Tests for get_layout_config."""

    def test_horizontal_row_spreads_evenly(self):
        positions = get_layout_config("horizontal-row", 3)
        assert [p.x for p in positions] == [25, 50, 75]
        assert all(p.y == 50 for p in positions)
        assert all(p.size == 80 for p in positions)

    def test_vertical_stack(self):
        positions = get_layout_config("vertical-stack", 4)
        assert [p.y for p in positions] == [20, 40, 60, 80]
        assert all(p.x == 50 for p in positions)

    def test_side_by_side_pair(self):
        positions = get_layout_config("side-by-side", 2)
        assert positions == [LayoutPosition(35, 50, 100), LayoutPosition(65, 50, 100)]

    def test_side_by_side_falls_back_to_row(self):
        positions = get_layout_config("side-by-side", 3)
        assert len(positions) == 3
        assert all(p.size == 100 for p in positions)

    def test_fixed_layout_truncated_to_count(self):
        positions = get_layout_config("grid-3x3", 4)
        assert len(positions) == 4
        assert positions[0] == LayoutPosition(25, 25, 60)

    def test_fixed_layout_caps_at_defined_slots(self):
        assert len(get_layout_config("grid-2x2", 9)) == 4

    def test_centered_large_focal_point(self):
        first = get_layout_config("centered-large", 1)[0]
        assert (first.x, first.y, first.size) == (50, 50, 150)

    def test_unknown_layout_uses_default(self):
        assert get_layout_config("spiral-galaxy", 3) == get_layout_config(DEFAULT_LAYOUT, 3)

    @pytest.mark.parametrize("layout", LAYOUT_TYPES)
    def test_positions_stay_on_canvas(self, layout):
        for position in get_layout_config(layout, 4):
            assert 0 <= position.x <= 100
            assert 0 <= position.y <= 100
            assert position.size > 0

    def test_to_dict(self):
        assert LayoutPosition(10, 20, 30).to_dict() == {"x": 10, "y": 20, "size": 30}
