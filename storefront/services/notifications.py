"""
Notification Sinks

The cart engine only decides when to signal a failure; a sink decides how
the message reaches the user. Any object with an ``error(message)`` method
can be passed to the engine.
"""

from typing import List, Protocol

from storefront.logging import get_logger

logger = get_logger(__name__)


class NotificationSink(Protocol):
    """Receives human-readable failure messages."""

    def error(self, message: str) -> None:
        ...


class LoggingNotificationSink:
    """Writes every message to the log at WARNING level."""

    def __init__(self, logger_name: str = "storefront.notifications"):
        self._logger = get_logger(logger_name)

    def error(self, message: str) -> None:
        self._logger.warning(message)


class RecordingNotificationSink:
    """Keeps messages in memory until the host drains them for display."""

    def __init__(self):
        self.messages: List[str] = []

    def error(self, message: str) -> None:
        logger.debug(f"Queued notification: {message}")
        self.messages.append(message)

    def drain(self) -> List[str]:
        """Return queued messages and clear the queue."""
        messages, self.messages = self.messages, []
        return messages
