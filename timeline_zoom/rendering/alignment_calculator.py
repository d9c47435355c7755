"""
Alignment Calculator - Pixel geometry and scroll re-anchoring for the timeline.

This module provides:
- The single pixel_width() function all row and header geometry derives from
- Conversions between calendar ordinals and content pixels
- Task bar and header cell geometry
- Anchor capture before a zoom transition and exact re-anchoring after it

Calendar positions are opaque ordinal integers; no calendar arithmetic
happens here. Header boundaries come from an external date helper.
"""

import math

from timeline_zoom.data.zoom_level import AlignmentAnchor

# Minimum task bar width in pixels before a host should treat it as hidden
MIN_VISIBLE_WIDTH = 12.0

# Absorbs float noise when converting pixels back to whole units
UNIT_EPSILON = 1e-9


def pixel_width(level, factor, units=1):
    """
    Width in pixels of a run of base calendar units.

    Args:
        level (ZoomLevel): Tier providing the base pixel density
        factor (float): Continuous zoom factor within the tier
        units (float): Number of base units (default: 1)

    Returns:
        float: level.base_pixels_per_unit * factor * units
    """
    return level.base_pixels_per_unit * factor * units


class AlignmentCalculator:
    """
    Converts (tier, factor) into pixel geometry for one timeline view.

    Content pixel 0 is the left edge of origin_unit. Every position and width
    is computed through pixel_width(), so rows and headers stay aligned at
    any tier.
    """

    pixel_width = staticmethod(pixel_width)

    def __init__(self, origin_unit=0):
        """
        Initialize the calculator.

        Args:
            origin_unit (int): Calendar ordinal drawn at content pixel 0
        """
        self.origin_unit = int(origin_unit)

    def unit_to_pixel(self, unit, level, factor):
        """
        Get the content x coordinate of a unit's left edge.

        Args:
            unit (int): Calendar ordinal
            level (ZoomLevel): Current tier
            factor (float): Current factor

        Returns:
            float: Content pixel position
        """
        return pixel_width(level, factor, unit - self.origin_unit)

    def pixel_to_unit(self, x, level, factor):
        """
        Get the calendar ordinal whose cell contains a content x coordinate.

        Args:
            x (float): Content pixel position
            level (ZoomLevel): Current tier
            factor (float): Current factor

        Returns:
            int: Calendar ordinal
        """
        return self.origin_unit + math.floor(x / pixel_width(level, factor) + UNIT_EPSILON)

    def span_geometry(self, start_unit, duration_units, level, factor):
        """
        Get the horizontal geometry of a task bar.

        Args:
            start_unit (int): Calendar ordinal the task starts on
            duration_units (float): Task length in base units
            level (ZoomLevel): Current tier
            factor (float): Current factor

        Returns:
            tuple: (x, width) in content pixels
        """
        return (
            self.unit_to_pixel(start_unit, level, factor),
            pixel_width(level, factor, duration_units),
        )

    def header_cell_width(self, level, factor):
        """Width of one header cell (unit_span base units) of the tier."""
        return pixel_width(level, factor, level.unit_span)

    def header_cells(self, boundaries, level, factor):
        """
        Get header cell geometry for externally computed period boundaries.

        Args:
            boundaries (list): Non-decreasing calendar ordinals; each adjacent
                pair delimits one header cell (e.g. week or month starts)
            level (ZoomLevel): Current tier
            factor (float): Current factor

        Returns:
            list: (x, width) tuples, one per cell

        Raises:
            ValueError: If boundaries decrease
        """
        cells = []
        for start, end in zip(boundaries, boundaries[1:]):
            if end < start:
                raise ValueError(f"Header boundaries must not decrease: {start} then {end}")
            cells.append(self.span_geometry(start, end - start, level, factor))
        return cells

    def content_width(self, unit_count, level, factor):
        return pixel_width(level, factor, unit_count)

    def visible_unit_range(self, scroll_offset, viewport_width, level, factor):
        """
        Get the calendar units at least partially visible in the viewport.

        Args:
            scroll_offset (float): Content x coordinate at the viewport's left edge
            viewport_width (float): Viewport width in pixels
            level (ZoomLevel): Current tier
            factor (float): Current factor

        Returns:
            tuple: (first_unit, last_unit), inclusive
        """
        first = self.pixel_to_unit(scroll_offset, level, factor)
        if viewport_width <= 0:
            return (first, first)
        last = self.pixel_to_unit(scroll_offset + viewport_width, level, factor)
        # A unit starting exactly at the right edge is not visible
        if self.unit_to_pixel(last, level, factor) >= scroll_offset + viewport_width - UNIT_EPSILON:
            last -= 1
        return (first, max(first, last))

    @staticmethod
    def is_width_visible(width):
        """
        Check whether a bar is wide enough to be shown.

        Args:
            width (float): Bar width in pixels

        Returns:
            bool: True if width meets MIN_VISIBLE_WIDTH
        """
        return width >= MIN_VISIBLE_WIDTH

    @staticmethod
    def clamp_scroll(offset, viewport_width, content_width):
        """
        Clamp a scroll offset into the valid range.

        Returns:
            float: offset limited to [0, max(0, content_width - viewport_width)]
        """
        max_scroll = max(0.0, content_width - viewport_width)
        return min(max(offset, 0.0), max_scroll)

    def capture_anchor(self, level, factor, scroll_offset, unit=None):
        """
        Capture the anchor unit and its screen offset under the current geometry.

        Args:
            level (ZoomLevel): Tier before the transition
            factor (float): Factor before the transition
            scroll_offset (float): Current scroll offset
            unit (int): Unit to anchor (default: leftmost visible unit)

        Returns:
            AlignmentAnchor: The anchor to restore after the transition
        """
        if unit is None:
            unit = self.pixel_to_unit(scroll_offset, level, factor)
        offset = self.unit_to_pixel(unit, level, factor) - scroll_offset
        return AlignmentAnchor(int(unit), offset)

    def anchor_screen_offset(self, anchor_unit, scroll_offset, level, factor):
        """Screen offset of a unit from the viewport's left edge."""
        return self.unit_to_pixel(anchor_unit, level, factor) - scroll_offset

    def reanchor(self, anchor, level, factor, viewport_width, content_width):
        """
        Compute the scroll offset that puts the anchor back at its screen offset.

        The anchor's position is recomputed exactly under the new geometry; the
        result is clamped when the content no longer extends far enough.

        Args:
            anchor (AlignmentAnchor): Anchor captured before the transition
            level (ZoomLevel): Tier after the transition
            factor (float): Factor after the transition
            viewport_width (float): Viewport width in pixels
            content_width (float): Content width under the new geometry

        Returns:
            float: New scroll offset
        """
        target = self.unit_to_pixel(anchor.unit, level, factor) - anchor.pixel_offset
        return self.clamp_scroll(target, viewport_width, content_width)
