"""Shared utilities for the timeline zoom engine."""

from .error_handler import (
    ConfigurationError,
    ErrorHandler,
    ErrorSeverity,
    InvalidLevelReference,
    TimelineZoomError,
    setup_logging,
)

__all__ = [
    'ConfigurationError',
    'ErrorHandler',
    'ErrorSeverity',
    'InvalidLevelReference',
    'TimelineZoomError',
    'setup_logging',
]
