"""
Timeline Viewport - Per-view zoom model for a Gantt timeline.

This module provides the TimelineViewport class which a hosting timeline
widget owns. It wraps every zoom command with anchor capture and exact
re-anchoring, so the calendar unit at the left edge of the view (or an
explicitly chosen unit) keeps its screen position across zoom changes.
"""

import logging

from timeline_zoom.data.zoom_level import ZoomResult
from timeline_zoom.rendering.alignment_calculator import AlignmentCalculator
from timeline_zoom.rendering.zoom_engine import ZoomEngine
from timeline_zoom.rendering.zoom_notifier import ZoomChangeNotifier
from timeline_zoom.utils.error_handler import ErrorHandler, InvalidLevelReference


class TimelineViewport:
    """
    Zoom and scroll model for one timeline view instance.

    The viewport owns its ZoomEngine (and therefore its ZoomState); nothing
    is shared between views. Subscribers receive (state, scroll_offset) after
    every zoom or scroll change; no-ops publish nothing.
    """

    def __init__(self, catalog, initial_state=None, origin_unit=0, unit_count=0,
                 viewport_width=0.0, error_handler=None):
        """
        Initialize the viewport.

        Args:
            catalog (ZoomLevelCatalog): Tier catalog shared by all views
            initial_state (ZoomState): Starting zoom (default: finest tier at 1.0)
            origin_unit (int): Calendar ordinal drawn at content pixel 0
            unit_count (int): Number of calendar units in the content
            viewport_width (float): Visible width in pixels
            error_handler (ErrorHandler): Handler for recoverable errors
        """
        self.engine = ZoomEngine(catalog, initial_state)
        self.calculator = AlignmentCalculator(origin_unit)
        self.unit_count = max(0, int(unit_count))
        self.viewport_width = max(0.0, float(viewport_width))
        self.scroll_offset = 0.0
        self.error_handler = error_handler or ErrorHandler()
        self.last_anchor = None
        self._notifier = ZoomChangeNotifier("viewport")
        self.logger = logging.getLogger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Geometry queries
    # ------------------------------------------------------------------

    @property
    def state(self):
        return self.engine.state

    @property
    def origin_unit(self):
        return self.calculator.origin_unit

    def pixels_per_unit(self):
        return self.engine.pixels_per_unit()

    def content_width(self):
        """Total content width in pixels under the current zoom."""
        state = self.engine.state
        return self.calculator.content_width(
            self.unit_count, self.engine.current_level(), state.factor
        )

    def max_scroll(self):
        return max(0.0, self.content_width() - self.viewport_width)

    def visible_unit_range(self):
        """
        Get the calendar units currently in view.

        Returns:
            tuple: (first_unit, last_unit), inclusive
        """
        return self.calculator.visible_unit_range(
            self.scroll_offset, self.viewport_width,
            self.engine.current_level(), self.engine.state.factor
        )

    def unit_to_pixel(self, unit):
        return self.calculator.unit_to_pixel(
            unit, self.engine.current_level(), self.engine.state.factor
        )

    def unit_screen_offset(self, unit):
        """Offset of a unit's left edge from the viewport's left edge."""
        return self.unit_to_pixel(unit) - self.scroll_offset

    def span_geometry(self, start_unit, duration_units):
        """
        Get a task bar's geometry under the current zoom.

        Returns:
            tuple: (x, width) in content pixels
        """
        return self.calculator.span_geometry(
            start_unit, duration_units, self.engine.current_level(), self.engine.state.factor
        )

    def header_cells(self, boundaries):
        return self.calculator.header_cells(
            boundaries, self.engine.current_level(), self.engine.state.factor
        )

    # ------------------------------------------------------------------
    # Zoom commands
    # ------------------------------------------------------------------

    def zoom_in(self, step=None, anchor_unit=None):
        """
        Zoom in one step, keeping the anchor unit in place.

        Args:
            step (float): Factor increment (default: the tier's step)
            anchor_unit (int): Unit to keep in place (default: leftmost visible)

        Returns:
            ZoomResult: Result of the engine command
        """
        return self._anchored(lambda: self.engine.zoom_in(step), anchor_unit)

    def zoom_out(self, step=None, anchor_unit=None):
        return self._anchored(lambda: self.engine.zoom_out(step), anchor_unit)

    def set_factor(self, value, anchor_unit=None):
        return self._anchored(lambda: self.engine.set_factor(value), anchor_unit)

    def reset_zoom(self, anchor_unit=None):
        return self._anchored(self.engine.reset_zoom, anchor_unit)

    def set_level(self, level_id, anchor_unit=None):
        """
        Switch to a tier by id, keeping the anchor unit in place.

        An unknown id is handled by the error handler and reported through the
        result; the zoom state and scroll offset stay unchanged.

        Args:
            level_id (str): Id of the target tier
            anchor_unit (int): Unit to keep in place (default: leftmost visible)

        Returns:
            ZoomResult: error is set when level_id is unknown
        """
        try:
            return self._anchored(lambda: self.engine.set_level(level_id), anchor_unit)
        except InvalidLevelReference as e:
            self.error_handler.handle_error(e, "switching zoom level")
            return ZoomResult(self.engine.state, False, error=e)

    def _anchored(self, command, anchor_unit):
        """Run a zoom command between anchor capture and re-anchoring."""
        old_level = self.engine.current_level()
        old_factor = self.engine.state.factor
        anchor = self.calculator.capture_anchor(
            old_level, old_factor, self.scroll_offset, anchor_unit
        )

        result = command()
        if not result.changed:
            return result

        self.last_anchor = anchor
        self.scroll_offset = self.calculator.reanchor(
            anchor, self.engine.current_level(), result.state.factor,
            self.viewport_width, self.content_width()
        )
        self.logger.debug(
            f"Re-anchored unit {anchor.unit} at {anchor.pixel_offset:.2f}px, "
            f"scroll offset now {self.scroll_offset:.2f}"
        )
        self._publish()
        return result

    # ------------------------------------------------------------------
    # Scroll and layout commands
    # ------------------------------------------------------------------

    def scroll_to(self, offset):
        """
        Scroll to a content offset, clamped to the valid range.

        Returns:
            bool: True if the offset changed
        """
        clamped = self.calculator.clamp_scroll(
            float(offset), self.viewport_width, self.content_width()
        )
        if clamped == self.scroll_offset:
            return False
        self.scroll_offset = clamped
        self._publish()
        return True

    def scroll_to_unit(self, unit, screen_offset=0.0):
        """
        Scroll so a unit's left edge sits at screen_offset from the left edge.

        Returns:
            bool: True if the offset changed
        """
        return self.scroll_to(self.unit_to_pixel(unit) - screen_offset)

    def resize(self, viewport_width):
        """
        Update the viewport width, clamping the scroll offset if needed.

        Returns:
            bool: True if the scroll offset changed
        """
        self.viewport_width = max(0.0, float(viewport_width))
        return self.scroll_to(self.scroll_offset)

    def set_content_range(self, origin_unit, unit_count):
        """
        Replace the calendar range drawn by the view.

        The unit at the left edge keeps its screen offset when it is still in
        range; otherwise the view scrolls to the start.
        """
        first_visible = self.visible_unit_range()[0]
        anchor = self.calculator.capture_anchor(
            self.engine.current_level(), self.engine.state.factor, self.scroll_offset,
            first_visible
        )

        self.calculator.origin_unit = int(origin_unit)
        self.unit_count = max(0, int(unit_count))

        if origin_unit <= anchor.unit < origin_unit + self.unit_count:
            self.scroll_offset = self.calculator.reanchor(
                anchor, self.engine.current_level(), self.engine.state.factor,
                self.viewport_width, self.content_width()
            )
        else:
            self.scroll_offset = 0.0
        self._publish()

    # ------------------------------------------------------------------
    # Subscription API
    # ------------------------------------------------------------------

    def subscribe(self, listener):
        """
        Register a listener called with (state, scroll_offset) after changes.

        Returns:
            callable: The registered listener
        """
        return self._notifier.subscribe(listener)

    def unsubscribe(self, listener):
        return self._notifier.unsubscribe(listener)

    def _publish(self):
        self._notifier.publish(self.engine.state, self.scroll_offset)

    def __repr__(self):
        return (
            f"TimelineViewport(zoom='{self.engine.describe()}', "
            f"scroll={self.scroll_offset:.1f}, width={self.viewport_width:.0f})"
        )
