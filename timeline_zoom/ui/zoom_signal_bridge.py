"""
Zoom Signal Bridge - Connects a TimelineViewport to Qt widgets.

The zoom engine and viewport are framework-free. This bridge subscribes to a
viewport's change feed and re-emits it as Qt signals, keeps an optional
horizontal QScrollBar in sync with the re-anchored scroll offset, and offers
slots that zoom buttons and sliders can connect to directly.
"""

import logging
import math

from PyQt5.QtCore import QObject, pyqtSignal, pyqtSlot

logger = logging.getLogger(__name__)


class ZoomSignalBridge(QObject):
    """
    Qt adapter for a TimelineViewport.

    Signals:
        zoom_changed: Emitted with the new ZoomState after a zoom change
        scroll_changed: Emitted with the new scroll offset after any change
        boundary_reached: Emitted with the boundary name when a zoom step is refused
        error_occurred: Emitted when a recoverable error is handled (severity, message, details)
    """

    zoom_changed = pyqtSignal(object)
    scroll_changed = pyqtSignal(float)
    boundary_reached = pyqtSignal(str)
    error_occurred = pyqtSignal(str, str, str)  # severity, message, details

    def __init__(self, viewport, scroll_bar=None, parent=None):
        """
        Initialize the bridge.

        Args:
            viewport (TimelineViewport): The view model to expose
            scroll_bar (QScrollBar): Horizontal scroll bar to keep in sync (optional)
            parent (QObject): Parent object
        """
        super().__init__(parent)
        self.viewport = viewport
        self.scroll_bar = None
        self._last_state = viewport.state
        self._syncing = False

        viewport.subscribe(self._on_viewport_changed)
        if scroll_bar is not None:
            self.bind_scroll_bar(scroll_bar)

    def bind_scroll_bar(self, scroll_bar):
        """
        Keep a scroll bar in sync with the viewport in both directions.

        Args:
            scroll_bar (QScrollBar): Horizontal scroll bar of the timeline view
        """
        if self.scroll_bar is not None:
            self.scroll_bar.valueChanged.disconnect(self._on_scroll_bar_moved)
        self.scroll_bar = scroll_bar
        scroll_bar.valueChanged.connect(self._on_scroll_bar_moved)
        self._sync_scroll_bar()

    def detach(self):
        """Stop listening to the viewport and release the scroll bar."""
        self.viewport.unsubscribe(self._on_viewport_changed)
        if self.scroll_bar is not None:
            self.scroll_bar.valueChanged.disconnect(self._on_scroll_bar_moved)
            self.scroll_bar = None

    # ------------------------------------------------------------------
    # Slots for zoom controls
    # ------------------------------------------------------------------

    @pyqtSlot()
    def zoom_in(self):
        return self._report(self.viewport.zoom_in())

    @pyqtSlot()
    def zoom_out(self):
        return self._report(self.viewport.zoom_out())

    @pyqtSlot()
    def reset_zoom(self):
        return self._report(self.viewport.reset_zoom())

    @pyqtSlot(float)
    def set_factor(self, value):
        return self._report(self.viewport.set_factor(value))

    @pyqtSlot(str)
    def set_level(self, level_id):
        return self._report(self.viewport.set_level(level_id))

    def _report(self, result):
        """Emit boundary and error signals for a command result."""
        if result.boundary:
            self.boundary_reached.emit(result.boundary)
        if result.error is not None:
            severity = getattr(result.error, 'severity', 'error')
            message = getattr(result.error, 'message', str(result.error))
            details = getattr(result.error, 'details', message)
            self.error_occurred.emit(severity, message, details)
        return result

    # ------------------------------------------------------------------
    # Viewport and scroll bar synchronization
    # ------------------------------------------------------------------

    def _on_viewport_changed(self, state, scroll_offset):
        if state != self._last_state:
            self._last_state = state
            self.zoom_changed.emit(state)
        self._sync_scroll_bar()
        self.scroll_changed.emit(scroll_offset)

    def _sync_scroll_bar(self):
        """Push range, page step and value to the bound scroll bar."""
        if self.scroll_bar is None:
            return
        self._syncing = True
        try:
            self.scroll_bar.setRange(0, int(math.ceil(self.viewport.max_scroll())))
            self.scroll_bar.setPageStep(max(1, int(self.viewport.viewport_width)))
            self.scroll_bar.setSingleStep(max(1, int(round(self.viewport.pixels_per_unit()))))
            self.scroll_bar.setValue(int(round(self.viewport.scroll_offset)))
        finally:
            self._syncing = False

    def _on_scroll_bar_moved(self, value):
        if self._syncing:
            return
        logger.debug(f"Scroll bar moved to {value}")
        self.viewport.scroll_to(value)
