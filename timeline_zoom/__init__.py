"""
Timeline Zoom Engine

This package provides the hybrid discrete/continuous zoom controller for a
Gantt-chart timeline view: ordered zoom tiers with a continuous factor inside
each tier, pixel geometry shared by rows and headers, and scroll re-anchoring
that keeps the chart aligned to the same calendar unit across zoom changes.

Qt integration lives in timeline_zoom.ui and is imported separately.
"""

__version__ = "1.0.0"
__author__ = "Timeline Zoom Development Team"

from .data import (
    AlignmentAnchor,
    CatalogConfig,
    ZoomLevel,
    ZoomLevelCatalog,
    ZoomResult,
    ZoomState,
)
from .rendering import AlignmentCalculator, ZoomChangeNotifier, ZoomEngine, pixel_width
from .timeline_viewport import TimelineViewport
from .utils import ConfigurationError, ErrorHandler, InvalidLevelReference, TimelineZoomError

__all__ = [
    'AlignmentAnchor',
    'AlignmentCalculator',
    'CatalogConfig',
    'ConfigurationError',
    'ErrorHandler',
    'InvalidLevelReference',
    'TimelineViewport',
    'TimelineZoomError',
    'ZoomChangeNotifier',
    'ZoomEngine',
    'ZoomLevel',
    'ZoomLevelCatalog',
    'ZoomResult',
    'ZoomState',
    'pixel_width',
]
