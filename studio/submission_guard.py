import threading
from contextlib import contextmanager

from studio.errors import DuplicateSubmissionError


class SubmissionGuard:
    """Tracks booking submission keys whose write sequence is still running."""

    def __init__(self):
        self._lock = threading.Lock()
        self._in_flight = set()

    def init_app(self, app):
        app.extensions["submission_guard"] = self

    def is_in_flight(self, key):
        with self._lock:
            return key in self._in_flight

    @contextmanager
    def claim(self, key):
        with self._lock:
            if key in self._in_flight:
                raise DuplicateSubmissionError()
            self._in_flight.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._in_flight.discard(key)
