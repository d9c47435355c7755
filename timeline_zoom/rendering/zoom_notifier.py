"""
Zoom Notifier - Synchronous change feed for zoom state subscribers.

Listeners are called in registration order, in the same call that committed
the change. There is no queuing or coalescing; a listener that raises stops
delivery and the exception reaches the caller of the command.
"""

import logging


class ZoomChangeNotifier:
    """
    Registry of change listeners.

    A listener is any callable; the arguments it receives are whatever the
    owner passes to publish().
    """

    def __init__(self, name="zoom"):
        """
        Initialize the notifier.

        Args:
            name (str): Feed name used in log messages
        """
        self.name = name
        self._listeners = []
        self.logger = logging.getLogger(self.__class__.__name__)

    def subscribe(self, listener):
        """
        Register a listener.

        Registering the same listener twice has no effect.

        Args:
            listener (callable): Called with the published arguments

        Returns:
            callable: The listener, so it can be used as a decorator
        """
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {type(listener).__name__}")
        if listener not in self._listeners:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener):
        """
        Remove a listener.

        Returns:
            bool: True if the listener was registered
        """
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def publish(self, *args):
        """Deliver args to every listener registered at the time of the call."""
        listeners = list(self._listeners)
        self.logger.debug(f"Publishing {self.name} change to {len(listeners)} listener(s)")
        for listener in listeners:
            listener(*args)
