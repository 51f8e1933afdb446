"""Bounded outbound queue for notification e-mails.

Requests publish and return immediately; a single daemon thread delivers.
A full queue or a failing mailer is logged as a warning and never reaches the
publisher.
"""

import logging
import queue
import threading
from dataclasses import dataclass

from studio.mailer import LogMailer, mailer_from_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutboundMessage:
    recipient: str
    subject: str
    body: str


class Outbox:
    def __init__(self, maxsize=100, mailer=None):
        self._queue = queue.Queue(maxsize=maxsize)
        self.mailer = mailer or LogMailer()
        self.delivered = 0
        self.failed = 0
        self._worker = None

    def init_app(self, app):
        # A running worker is blocked on the current queue; only resize while idle.
        if not self.running:
            self._queue = queue.Queue(maxsize=app.config.get("NOTIFICATION_QUEUE_SIZE", 100))
        self.mailer = mailer_from_config(app.config)
        app.extensions["outbox"] = self
        if app.config.get("NOTIFICATION_WORKER_ENABLED", True):
            self.start()

    def publish(self, message):
        try:
            self._queue.put_nowait(message)
        except queue.Full:
            logger.warning("Notification outbox full; dropping mail to %s", message.recipient)
            return False
        return True

    def pending(self):
        return self._queue.qsize()

    def drain(self):
        """Deliver everything currently queued on the calling thread."""
        count = 0
        while True:
            try:
                message = self._queue.get_nowait()
            except queue.Empty:
                return count
            self._deliver(message)
            self._queue.task_done()
            count += 1

    @property
    def running(self):
        return self._worker is not None and self._worker.is_alive()

    def start(self):
        if self.running:
            return
        self._worker = threading.Thread(target=self._run, name="notification-outbox", daemon=True)
        self._worker.start()

    def _run(self):
        while True:
            message = self._queue.get()
            self._deliver(message)
            self._queue.task_done()

    def _deliver(self, message):
        try:
            self.mailer.send(message)
            self.delivered += 1
        except Exception as exc:
            self.failed += 1
            logger.warning("Notification delivery to %s failed: %s", message.recipient, exc)
