"""
Cooperative cancellation for network calls owned by an editor view.
"""

import logging
import threading

from ..errors import Cancelled

logger = logging.getLogger(__name__)


class CancelToken:
    """
    Abort handle shared by every request an owner issues.

    Cancelling is one-way. Callers check the token before sending a request
    and again before applying its response, so a late response from a closed
    view is dropped instead of mutating state nobody displays.
    """

    def __init__(self, name: str = "token"):
        self.name = name
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        if not self._event.is_set():
            logger.debug("Cancelling %s", self.name)
        self._event.set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise Cancelled(f"{self.name} was cancelled")
