"""External data change notifications."""

import threading
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)


class ChangeNotifier:
    """Signal that data was changed outside this process, e.g. by an automation.

    Subscribers take no arguments. Notifying repeatedly is harmless because
    subscribers reload from storage.
    """

    def __init__(self):
        self._subscribers: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def notify(self) -> None:
        """Call every subscriber."""
        with self._lock:
            subscribers = list(self._subscribers)
        logger.info("external_change_notified", subscribers=len(subscribers))
        for callback in subscribers:
            callback()
