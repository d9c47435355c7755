"""
Zoom Engine - Hybrid discrete/continuous zoom state machine for the timeline.

This module provides the ZoomEngine class which manages:
- Continuous factor changes within a zoom tier
- Tier switching when a factor range is exhausted
- Clamping of slider input and explicit tier selection
- Global boundary detection and change notification

The engine holds no framework objects. A hosting view owns one engine per
timeline instance and subscribes to its change feed.
"""

import logging
import math

from timeline_zoom.data.zoom_level import (
    BOUNDARY_GLOBAL_MAXIMUM,
    BOUNDARY_GLOBAL_MINIMUM,
    FACTOR_TOLERANCE,
    MIN_FACTOR,
    ZoomResult,
    ZoomState,
    decimal_places,
)
from timeline_zoom.rendering.alignment_calculator import pixel_width
from timeline_zoom.rendering.zoom_notifier import ZoomChangeNotifier

logger = logging.getLogger(__name__)


class ZoomEngine:
    """
    Computes and commits zoom transitions over (level_index, factor).

    Tier policy:
        zoom_in first raises the factor by the tier's step; once the tier's
        max_factor is exhausted it moves to the finer neighbor at factor 1.0.
        zoom_out first lowers the factor; once 1.0 is reached it moves to the
        coarser neighbor at that neighbor's max_factor. At the finest and
        coarsest tiers a step that would overshoot lands on the edge itself,
        so the global extremes are always reachable. set_level always
        starts the selected tier at factor 1.0; set_factor never leaves the
        current tier.

    Every command returns a ZoomResult. Listeners are notified only when a
    command actually changes the state.
    """

    def __init__(self, catalog, initial_state=None):
        """
        Initialize the ZoomEngine.

        Args:
            catalog (ZoomLevelCatalog): Validated tier catalog
            initial_state (ZoomState): Starting state (default: finest tier at 1.0).
                An out-of-range factor is clamped into the tier's range.

        Raises:
            ValueError: If initial_state refers to a level index outside the catalog
        """
        self.catalog = catalog
        self._notifier = ZoomChangeNotifier("zoom state")

        if initial_state is None:
            initial_state = ZoomState(0, MIN_FACTOR)

        if not 0 <= initial_state.level_index < catalog.count():
            raise ValueError(
                f"Initial zoom level must be between 0 and {catalog.count() - 1}, "
                f"got {initial_state.level_index}"
            )

        level = catalog.by_index(initial_state.level_index)
        factor = float(initial_state.factor)
        if not level.is_valid_factor(factor):
            logger.warning(
                f"Initial factor {factor} is outside {level.level_id} range "
                f"[{MIN_FACTOR}, {level.max_factor}], clamping"
            )
        self._state = ZoomState(level.index, level.clamp_factor(factor))

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------

    @property
    def state(self):
        """
        Get the current zoom state.

        Returns:
            ZoomState: Immutable snapshot of the current tier and factor
        """
        return self._state

    def current_level(self):
        """
        Get the current zoom tier.

        Returns:
            ZoomLevel: Configuration of the current tier
        """
        return self.catalog.by_index(self._state.level_index)

    def current_factor(self):
        return self._state.factor

    def pixels_per_unit(self):
        """
        Get the pixel width of one base calendar unit at the current zoom.

        Returns:
            float: base_pixels_per_unit of the current tier times the factor
        """
        return pixel_width(self.current_level(), self._state.factor)

    def is_at_global_maximum(self):
        """
        Check whether the view is at the finest tier's largest factor.

        Returns:
            bool: True if no zoom-in magnification is left
        """
        level = self.current_level()
        return (
            self.catalog.is_finest(level.index)
            and abs(self._state.factor - level.max_factor) <= FACTOR_TOLERANCE
        )

    def is_at_global_minimum(self):
        """
        Check whether the view is at the coarsest tier's base factor.

        Returns:
            bool: True if no zoom-out is left
        """
        level = self.current_level()
        return (
            self.catalog.is_coarsest(level.index)
            and abs(self._state.factor - MIN_FACTOR) <= FACTOR_TOLERANCE
        )

    def can_zoom_in(self):
        """
        Check if zoom_in() with the tier's default step would change the state.

        Returns:
            bool: True if zooming in is possible
        """
        return not self.is_at_global_maximum()

    def can_zoom_out(self):
        """
        Check if zoom_out() with the tier's default step would change the state.

        Returns:
            bool: True if zooming out is possible
        """
        return not self.is_at_global_minimum()

    # ------------------------------------------------------------------
    # Command API
    # ------------------------------------------------------------------

    def zoom_in(self, step=None):
        """
        Zoom in by one step.

        Args:
            step (float): Factor increment (default: the current tier's step)

        Returns:
            ZoomResult: boundary is BOUNDARY_GLOBAL_MAXIMUM when the view
                is already at the global maximum
        """
        level = self.current_level()
        step, precision = self._resolve_step(level, step)

        candidate = self._state.factor + step
        if candidate <= level.max_factor + FACTOR_TOLERANCE:
            return self._commit(
                ZoomState(level.index, level.clamp_factor(candidate, precision)), "zoom_in"
            )

        finer = self.catalog.finer_neighbor(level.index)
        if finer is not None:
            # Finer tiers are entered at their finest magnification
            return self._commit(ZoomState(finer.index, MIN_FACTOR), "zoom_in")

        if not self.is_at_global_maximum():
            # Off-grid max_factor: the last step lands exactly on the edge
            return self._commit(ZoomState(level.index, level.max_factor), "zoom_in")

        logger.debug(f"zoom_in refused at {self.describe()}: global maximum reached")
        return ZoomResult(self._state, False, BOUNDARY_GLOBAL_MAXIMUM)

    def zoom_out(self, step=None):
        """
        Zoom out by one step.

        Args:
            step (float): Factor decrement (default: the current tier's step)

        Returns:
            ZoomResult: boundary is BOUNDARY_GLOBAL_MINIMUM when the view
                is already at the global minimum
        """
        level = self.current_level()
        step, precision = self._resolve_step(level, step)

        candidate = self._state.factor - step
        if candidate >= MIN_FACTOR - FACTOR_TOLERANCE:
            return self._commit(
                ZoomState(level.index, level.clamp_factor(candidate, precision)), "zoom_out"
            )

        coarser = self.catalog.coarser_neighbor(level.index)
        if coarser is not None:
            # Coarser tiers are entered at their coarsest magnification
            return self._commit(
                ZoomState(coarser.index, coarser.clamp_factor(coarser.max_factor)), "zoom_out"
            )

        if not self.is_at_global_minimum():
            return self._commit(ZoomState(level.index, MIN_FACTOR), "zoom_out")

        logger.debug(f"zoom_out refused at {self.describe()}: global minimum reached")
        return ZoomResult(self._state, False, BOUNDARY_GLOBAL_MINIMUM)

    def set_factor(self, value):
        """
        Set the continuous factor within the current tier.

        Out-of-range values are clamped into [1.0, max_factor]; the tier never
        changes. NaN leaves the state untouched.

        Args:
            value (float): Requested factor, typically from a slider

        Returns:
            ZoomResult: The resulting state
        """
        value = float(value)
        if math.isnan(value):
            logger.debug("set_factor ignored NaN input")
            return ZoomResult(self._state, False)

        level = self.current_level()
        return self._commit(ZoomState(level.index, level.clamp_factor(value)), "set_factor")

    def set_level(self, level_id):
        """
        Switch to a tier by id, starting at factor 1.0.

        Args:
            level_id (str): Id of the target tier

        Returns:
            ZoomResult: The resulting state

        Raises:
            InvalidLevelReference: If level_id is not in the catalog (state unchanged)
        """
        index = self.catalog.index_of(level_id)
        return self._commit(ZoomState(index, MIN_FACTOR), "set_level")

    def reset_zoom(self):
        """
        Return to factor 1.0 within the current tier.

        Returns:
            ZoomResult: The resulting state
        """
        return self._commit(ZoomState(self._state.level_index, MIN_FACTOR), "reset_zoom")

    # ------------------------------------------------------------------
    # Subscription API
    # ------------------------------------------------------------------

    def subscribe(self, listener):
        """
        Register a listener called with the new ZoomState after each change.

        Args:
            listener (callable): Receives one ZoomState argument

        Returns:
            callable: The registered listener
        """
        return self._notifier.subscribe(listener)

    def unsubscribe(self, listener):
        return self._notifier.unsubscribe(listener)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_step(level, step):
        """Return (step, rounding precision) for a zoom_in / zoom_out call."""
        if step is None:
            return level.step, level.precision
        step = float(step)
        if not math.isfinite(step) or step <= 0:
            raise ValueError(f"Zoom step must be a positive number, got {step}")
        return step, max(level.precision, decimal_places(step))

    def _commit(self, new_state, operation):
        """Replace the state and notify listeners unless nothing changed."""
        old_state = self._state
        if (new_state.level_index == old_state.level_index
                and abs(new_state.factor - old_state.factor) <= FACTOR_TOLERANCE):
            return ZoomResult(old_state, False)

        self._state = new_state
        logger.debug(
            f"{operation}: level {old_state.level_index} @ {old_state.factor} -> "
            f"level {new_state.level_index} @ {new_state.factor}"
        )
        self._notifier.publish(new_state)
        return ZoomResult(new_state, True)

    def describe(self):
        """
        Get a human-readable description of the current zoom.

        Returns:
            str: e.g. 'WeekDay @ 1.5x'
        """
        level = self.current_level()
        digits = max(1, level.precision)
        return f"{level.level_id} @ {self._state.factor:.{digits}f}x"

    def get_zoom_info(self):
        """
        Get complete information about the current zoom.

        Returns:
            dict: Dictionary with keys 'level', 'level_id', 'name', 'factor',
                'max_factor', 'pixels_per_unit', 'at_global_minimum',
                'at_global_maximum'
        """
        level = self.current_level()
        return {
            'level': level.index,
            'level_id': level.level_id,
            'name': level.name,
            'factor': self._state.factor,
            'max_factor': level.max_factor,
            'pixels_per_unit': self.pixels_per_unit(),
            'at_global_minimum': self.is_at_global_minimum(),
            'at_global_maximum': self.is_at_global_maximum(),
        }

    def __repr__(self):
        return f"ZoomEngine(level={self._state.level_index}, factor={self._state.factor})"
