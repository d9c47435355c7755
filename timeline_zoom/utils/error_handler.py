"""
Error Handler Utility
=====================

This module provides the exception hierarchy and centralized error handling
for the timeline zoom engine, including severity-aware logging and a short
history of recently handled errors.

Boundary hits are not errors: zoom commands report them through
``ZoomResult.boundary`` and never raise.
"""

import logging
import sys
import traceback
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

# Configure logger
logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ErrorSeverity:
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TimelineZoomError(Exception):
    """Base exception for timeline zoom errors."""

    def __init__(self, message: str, details: Optional[str] = None,
                 severity: str = ErrorSeverity.ERROR):
        """
        Initialize timeline zoom error.

        Args:
            message: User-friendly error message
            details: Technical details for logging
            severity: Error severity level
        """
        super().__init__(message)
        self.message = message
        self.details = details or message
        self.severity = severity


class ConfigurationError(TimelineZoomError):
    """
    Raised when a zoom catalog or its configuration source is invalid.

    This is fatal: it is raised while the catalog is being built, before any
    ZoomState exists, and the engine must not operate on the rejected catalog.
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None,
                 source: Optional[str] = None):
        """
        Initialize configuration error.

        Args:
            message: User-friendly error message
            problems: Individual invariant violations that were found
            source: Configuration file or origin that produced the catalog
        """
        details = f"{message}\n"
        if source:
            details += f"Source: {source}\n"
        if problems:
            details += "\nProblems:\n"
            for i, problem in enumerate(problems, 1):
                details += f"{i}. {problem}\n"

        super().__init__(message, details, ErrorSeverity.CRITICAL)
        self.problems = problems or []
        self.source = source


class InvalidLevelReference(TimelineZoomError):
    """Raised when a zoom level id is not present in the catalog."""

    def __init__(self, level_id: Any, known_ids: Optional[List[str]] = None):
        message = f"Unknown zoom level: {level_id!r}"
        details = message
        if known_ids:
            details += f"\nKnown levels: {', '.join(known_ids)}"
        super().__init__(message, details, ErrorSeverity.WARNING)
        self.level_id = level_id
        self.known_ids = known_ids or []


def setup_logging(log_level: int = logging.INFO, log_file: Optional[str] = None,
                  logger_name: str = 'timeline_zoom') -> logging.Logger:
    """
    Configure logging for the timeline zoom package.

    Args:
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG)
        log_file: Optional file to write logs to
        logger_name: Name of the logger to configure

    Returns:
        logging.Logger: The configured logger
    """
    package_logger = logging.getLogger(logger_name)

    # Clear any existing handlers
    package_logger.handlers = []
    package_logger.setLevel(log_level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            package_logger.error(f"Failed to set up file logging: {e}")
        else:
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

    return package_logger


class ErrorHandler:
    """
    Centralized error handler for the timeline zoom engine.

    Logs handled errors at a level matching their severity, keeps the most
    recent errors for later inspection, and forwards each handled error to an
    optional callback so a hosting UI can surface it.
    """

    def __init__(self, on_error: Optional[Callable[[str, str, str], None]] = None,
                 max_stored_errors: int = 10):
        """
        Initialize error handler.

        Args:
            on_error: Callback receiving (severity, message, details)
            max_stored_errors: Number of recent errors kept in history
        """
        self.on_error = on_error
        self._error_count = 0
        self._last_errors = []
        self._max_stored_errors = max_stored_errors

    def handle_error(self, error: Exception, context: str = "") -> Dict[str, Any]:
        """
        Handle an error with logging and history tracking.

        Args:
            error: The exception that occurred
            context: Context description (e.g., "switching zoom level")

        Returns:
            dict: The stored error record
        """
        self._error_count += 1

        if isinstance(error, TimelineZoomError):
            message = error.message
            details = error.details
            severity = error.severity
        else:
            message = f"An unexpected error occurred while {context}" if context else "An unexpected error occurred"
            error_traceback = traceback.format_exc()
            details = f"Context: {context}\n{type(error).__name__}: {error}\n{error_traceback}"
            severity = ErrorSeverity.ERROR

        log_message = f"Error in {context}: {details}" if context else f"Error: {details}"

        if severity == ErrorSeverity.CRITICAL:
            logger.critical(log_message)
        elif severity == ErrorSeverity.ERROR:
            logger.error(log_message)
        elif severity == ErrorSeverity.WARNING:
            logger.warning(log_message)
        else:
            logger.info(log_message)

        record = self._store_error(severity, message, details)

        if self.on_error is not None:
            self.on_error(severity, message, details)

        return record

    def _store_error(self, severity: str, message: str, details: str) -> Dict[str, Any]:
        """
        Store error in history for later retrieval.

        Args:
            severity: Error severity
            message: Error message
            details: Error details

        Returns:
            dict: The stored error record
        """
        error_record = {
            'timestamp': datetime.now(),
            'severity': severity,
            'message': message,
            'details': details
        }

        self._last_errors.append(error_record)

        # Keep only last N errors
        if len(self._last_errors) > self._max_stored_errors:
            self._last_errors = self._last_errors[-self._max_stored_errors:]

        return error_record

    def get_error_history(self) -> list:
        """
        Get recent error history.

        Returns:
            list: List of error records, oldest first
        """
        return self._last_errors.copy()

    def get_error_count(self) -> int:
        """
        Get total error count.

        Returns:
            int: Number of errors handled
        """
        return self._error_count

    def clear_error_history(self):
        """Clear error history and reset count."""
        self._last_errors.clear()
        self._error_count = 0
