"""
Cancellation token shared by every fetch of one request
"""

import threading

from .errors import RequestCancelled


class CancellationToken:
    """Set once a newer request from the same client takes over"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise RequestCancelled("Request superseded by a newer one")

    def sleep(self, seconds: float) -> bool:
        """
        Wait up to `seconds`, waking early on cancellation

        Returns:
            True if the token was cancelled during the wait
        """
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)
