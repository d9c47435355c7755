"""Tests for pixel geometry and scroll re-anchoring."""

import pytest

from timeline_zoom.data.zoom_level import AlignmentAnchor
from timeline_zoom.rendering.alignment_calculator import (
    MIN_VISIBLE_WIDTH,
    AlignmentCalculator,
    pixel_width,
)


class TestPixelWidth:
    """Tests for the shared pixel width function."""

    def test_matches_base_times_factor_for_every_tier(self, scenario_catalog):
        for level in scenario_catalog:
            factor = 1.0
            while factor <= level.max_factor:
                assert pixel_width(level, factor) == pytest.approx(level.base_pixels_per_unit * factor)
                factor += level.step

    def test_scales_with_units(self, scenario_catalog):
        level = scenario_catalog.by_index(1)
        assert pixel_width(level, 2.0, 7) == pytest.approx(420.0)

    def test_calculator_uses_same_function(self, scenario_catalog):
        level = scenario_catalog.by_index(2)
        assert AlignmentCalculator.pixel_width(level, 1.5) == pixel_width(level, 1.5)


class TestGeometry:
    """Tests for unit/pixel conversions, bars and header cells."""

    def test_unit_to_pixel_relative_to_origin(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=100)
        level = scenario_catalog.by_index(0)
        assert calculator.unit_to_pixel(100, level, 1.0) == 0.0
        assert calculator.unit_to_pixel(110, level, 1.5) == pytest.approx(900.0)
        assert calculator.unit_to_pixel(95, level, 1.0) == pytest.approx(-300.0)

    def test_pixel_to_unit(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=100)
        level = scenario_catalog.by_index(0)
        assert calculator.pixel_to_unit(0, level, 1.0) == 100
        assert calculator.pixel_to_unit(59.9, level, 1.0) == 100
        assert calculator.pixel_to_unit(60, level, 1.0) == 101
        assert calculator.pixel_to_unit(-1, level, 1.0) == 99

    def test_pixel_to_unit_tolerates_float_noise(self, scenario_catalog):
        calculator = AlignmentCalculator()
        level = scenario_catalog.by_index(2)
        x = calculator.unit_to_pixel(7, level, 1.1)
        assert calculator.pixel_to_unit(x, level, 1.1) == 7

    def test_span_geometry(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=0)
        level = scenario_catalog.by_index(1)
        assert calculator.span_geometry(10, 5, level, 2.0) == pytest.approx((600.0, 300.0))

    def test_header_cell_width_uses_unit_span(self, scenario_catalog):
        calculator = AlignmentCalculator()
        month_week = scenario_catalog.by_index(1)
        assert calculator.header_cell_width(month_week, 1.0) == pytest.approx(210.0)

    def test_header_cells_align_with_bars(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=0)
        level = scenario_catalog.by_index(2)
        boundaries = [0, 31, 59, 90]
        cells = calculator.header_cells(boundaries, level, 2.5)

        assert len(cells) == 3
        for (x, width), start, end in zip(cells, boundaries, boundaries[1:]):
            bar_x, bar_width = calculator.span_geometry(start, end - start, level, 2.5)
            assert x == bar_x
            assert width == bar_width
        assert cells[1][0] + cells[1][1] == pytest.approx(cells[2][0])

    def test_header_cells_reject_decreasing_boundaries(self, scenario_catalog):
        calculator = AlignmentCalculator()
        with pytest.raises(ValueError):
            calculator.header_cells([0, 30, 20], scenario_catalog.by_index(2), 1.0)

    def test_visible_unit_range(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=0)
        level = scenario_catalog.by_index(0)
        assert calculator.visible_unit_range(0, 120, level, 1.0) == (0, 1)
        assert calculator.visible_unit_range(30, 120, level, 1.0) == (0, 2)
        assert calculator.visible_unit_range(30, 0, level, 1.0) == (0, 0)

    def test_width_visibility(self):
        assert AlignmentCalculator.is_width_visible(MIN_VISIBLE_WIDTH)
        assert not AlignmentCalculator.is_width_visible(MIN_VISIBLE_WIDTH - 0.5)

    def test_clamp_scroll(self):
        assert AlignmentCalculator.clamp_scroll(-20, 500, 2000) == 0.0
        assert AlignmentCalculator.clamp_scroll(1800, 500, 2000) == 1500.0
        assert AlignmentCalculator.clamp_scroll(300, 500, 200) == 0.0


class TestReanchoring:
    """Tests for anchor capture and restoration."""

    def test_capture_default_anchor_is_leftmost_visible_unit(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=0)
        level = scenario_catalog.by_index(0)
        anchor = calculator.capture_anchor(level, 1.0, scroll_offset=150)
        assert anchor == AlignmentAnchor(unit=2, pixel_offset=-30.0)

    def test_capture_explicit_unit(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=0)
        level = scenario_catalog.by_index(0)
        anchor = calculator.capture_anchor(level, 1.0, scroll_offset=150, unit=5)
        assert anchor.pixel_offset == pytest.approx(150.0)

    def test_reanchor_restores_screen_offset(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=0)
        week_day = scenario_catalog.by_index(0)
        month_week = scenario_catalog.by_index(1)

        anchor = calculator.capture_anchor(week_day, 2.0, scroll_offset=12030)
        content = calculator.content_width(1000, month_week, 3.0)
        new_scroll = calculator.reanchor(anchor, month_week, 3.0, 800, content)

        offset_after = calculator.anchor_screen_offset(anchor.unit, new_scroll, month_week, 3.0)
        assert offset_after == pytest.approx(anchor.pixel_offset)

    def test_reanchor_clamps_when_content_shorter_than_viewport(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=0)
        week_day = scenario_catalog.by_index(0)
        year_quarter = scenario_catalog.by_index(3)

        anchor = calculator.capture_anchor(week_day, 1.0, scroll_offset=3000)
        content = calculator.content_width(100, year_quarter, 1.0)
        assert calculator.reanchor(anchor, year_quarter, 1.0, 800, content) == 0.0

    def test_reanchor_clamps_at_end_of_content(self, scenario_catalog):
        calculator = AlignmentCalculator(origin_unit=0)
        week_day = scenario_catalog.by_index(0)
        month_week = scenario_catalog.by_index(1)

        anchor = calculator.capture_anchor(week_day, 2.5, scroll_offset=14200, unit=99)
        content = calculator.content_width(100, month_week, 1.0)
        new_scroll = calculator.reanchor(anchor, month_week, 1.0, 800, content)
        assert new_scroll == pytest.approx(content - 800)
