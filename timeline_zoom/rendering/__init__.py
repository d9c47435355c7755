"""Zoom transitions, pixel geometry and change notification."""

from .alignment_calculator import MIN_VISIBLE_WIDTH, AlignmentCalculator, pixel_width
from .zoom_engine import ZoomEngine
from .zoom_notifier import ZoomChangeNotifier

__all__ = [
    'AlignmentCalculator',
    'MIN_VISIBLE_WIDTH',
    'ZoomChangeNotifier',
    'ZoomEngine',
    'pixel_width',
]
