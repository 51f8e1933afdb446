import logging
import secrets
import threading
import time
from dataclasses import dataclass, replace
from datetime import datetime

from studio.extensions import db, outbox
from studio.models import Notification
from studio.models.base import utcnow
from studio.outbox import OutboundMessage
from studio.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationEntry:
    token: str
    title: str
    message: str
    timestamp: datetime
    is_read: bool = False

    def to_dict(self):
        return {
            "id": self.token,
            "title": self.title,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "is_read": self.is_read,
        }


def new_notification_token():
    return f"NOTIF-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


class NotificationRepository:
    """list/append/update over one owner's notifications, most recent first."""

    def list(self, limit=None):
        raise NotImplementedError

    def append(self, entry):
        raise NotImplementedError

    def update(self, token, **changes):
        raise NotImplementedError

    def update_all(self, **changes):
        raise NotImplementedError


class MemoryNotificationRepository(NotificationRepository):
    def __init__(self):
        self._entries = []
        self._lock = threading.Lock()

    def list(self, limit=None):
        with self._lock:
            entries = list(self._entries)
        return entries[:limit] if limit is not None else entries

    def append(self, entry):
        with self._lock:
            self._entries.insert(0, entry)
        return entry

    def update(self, token, **changes):
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.token == token:
                    self._entries[index] = replace(entry, **changes)
                    return True
        return False

    def update_all(self, **changes):
        with self._lock:
            self._entries = [replace(entry, **changes) for entry in self._entries]
            return len(self._entries)


class SqlNotificationRepository(NotificationRepository):
    def __init__(self, user_id):
        self.user_id = user_id

    @staticmethod
    def _to_entry(row):
        return NotificationEntry(
            token=row.token,
            title=row.title,
            message=row.message,
            timestamp=row.created_at,
            is_read=row.is_read,
        )

    def list(self, limit=None):
        # Autoincrement ids follow insertion order.
        query = Notification.owned_by(self.user_id).order_by(Notification.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entry(row) for row in query.all()]

    def append(self, entry):
        row = Notification(
            user_id=self.user_id,
            token=entry.token,
            title=entry.title,
            message=entry.message,
            is_read=entry.is_read,
            created_at=entry.timestamp,
        )
        db.session.add(row)
        db.session.commit()
        return entry

    def update(self, token, **changes):
        updated = Notification.owned_by(self.user_id).filter(Notification.token == token).update(changes)
        db.session.commit()
        return updated > 0

    def update_all(self, **changes):
        updated = Notification.owned_by(self.user_id).update(changes)
        db.session.commit()
        return updated


class NotificationService:
    def __init__(self, repository, outbox=None, recipient=None):
        self.repository = repository
        self.outbox = outbox
        self.recipient = (recipient or "").strip() or None

    def notify(self, title, message):
        entry = NotificationEntry(
            token=new_notification_token(),
            title=title,
            message=message,
            timestamp=utcnow(),
        )
        self.repository.append(entry)
        self._deliver(entry)
        return entry

    def _deliver(self, entry):
        if not self.recipient:
            logger.warning("No vendor e-mail configured; notification %s not delivered.", entry.token)
            return
        if self.outbox is None:
            logger.warning("No outbox configured; notification %s not delivered.", entry.token)
            return
        body = f"{entry.message}\n\nWaktu: {entry.timestamp.strftime('%d/%m/%Y %H:%M')}"
        self.outbox.publish(OutboundMessage(recipient=self.recipient, subject=entry.title, body=body))

    def list(self, limit=None):
        return self.repository.list(limit=limit)

    def unread_count(self):
        return sum(1 for entry in self.repository.list() if not entry.is_read)

    def mark_read(self, token):
        return self.repository.update(token, is_read=True)

    def mark_all_read(self):
        return self.repository.update_all(is_read=True)

    @classmethod
    def for_vendor(cls, vendor_id, profile=None):
        profile = profile or ProfileService.get_profile(vendor_id)
        return cls(SqlNotificationRepository(vendor_id), outbox=outbox, recipient=profile.email)
