"""Qt integration for the timeline zoom engine."""

from .zoom_signal_bridge import ZoomSignalBridge

__all__ = ['ZoomSignalBridge']
