import logging
import re
import threading

from flask import Flask

from studio.outbox import OutboundMessage, Outbox
from studio.services.notification_service import MemoryNotificationRepository, NotificationService


class RecordingMailer:
    def __init__(self):
        self.sent = []

    def send(self, message):
        self.sent.append(message)


class BrokenMailer:
    def send(self, message):
        raise OSError("smtp down")


def test_notify_prepends_unread_entry_with_token():
    service = NotificationService(MemoryNotificationRepository())

    first = service.notify("Booking baru", "A")
    second = service.notify("Prospek baru", "B")

    assert re.fullmatch(r"NOTIF-\d+-[0-9a-f]{6}", first.token)
    assert first.token != second.token
    assert [entry.title for entry in service.list()] == ["Prospek baru", "Booking baru"]
    assert service.unread_count() == 2
    assert service.list(limit=1)[0].token == second.token


def test_mark_read_is_idempotent():
    service = NotificationService(MemoryNotificationRepository())
    entry = service.notify("Booking baru", "A")
    service.notify("Feedback baru", "B")

    assert service.mark_read(entry.token)
    assert service.mark_read(entry.token)
    assert service.unread_count() == 1
    assert not service.mark_read("NOTIF-0-000000")

    service.mark_all_read()
    service.mark_all_read()
    assert service.unread_count() == 0


def test_missing_recipient_logs_warning(caplog):
    outbox = Outbox(mailer=RecordingMailer())
    service = NotificationService(MemoryNotificationRepository(), outbox=outbox, recipient="")

    with caplog.at_level(logging.WARNING):
        service.notify("Booking baru", "A")

    assert outbox.pending() == 0
    assert "No vendor e-mail configured" in caplog.text


def test_notification_mail_goes_through_outbox():
    mailer = RecordingMailer()
    outbox = Outbox(mailer=mailer)
    service = NotificationService(MemoryNotificationRepository(), outbox=outbox, recipient="studio@vena.local")

    service.notify("Booking baru", "Budi memesan paket Gold.")
    assert outbox.pending() == 1
    assert outbox.drain() == 1

    [message] = mailer.sent
    assert message.recipient == "studio@vena.local"
    assert message.subject == "Booking baru"
    assert message.body.startswith("Budi memesan paket Gold.")
    assert "Waktu:" in message.body


def test_failing_mailer_never_reaches_caller(caplog):
    outbox = Outbox(mailer=BrokenMailer())
    service = NotificationService(MemoryNotificationRepository(), outbox=outbox, recipient="studio@vena.local")

    service.notify("Booking baru", "A")
    with caplog.at_level(logging.WARNING):
        outbox.drain()

    assert outbox.failed == 1
    assert "smtp down" in caplog.text


def test_full_outbox_drops_message():
    outbox = Outbox(maxsize=1, mailer=RecordingMailer())
    assert outbox.publish(OutboundMessage("a@x.id", "s", "b"))
    assert not outbox.publish(OutboundMessage("a@x.id", "s", "b"))


class SignallingMailer(RecordingMailer):
    def __init__(self):
        super().__init__()
        self.arrived = threading.Event()

    def send(self, message):
        super().send(message)
        self.arrived.set()


def test_worker_keeps_delivering_after_second_init_app():
    outbox = Outbox()
    for _ in range(2):
        app = Flask(__name__)
        app.config.update(NOTIFICATION_WORKER_ENABLED=True, NOTIFICATION_QUEUE_SIZE=10)
        outbox.init_app(app)

    mailer = SignallingMailer()
    outbox.mailer = mailer
    assert outbox.publish(OutboundMessage("studio@vena.local", "Booking baru", "A"))

    assert mailer.arrived.wait(timeout=5)
    assert outbox.pending() == 0
    assert [message.subject for message in mailer.sent] == ["Booking baru"]
