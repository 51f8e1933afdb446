"""Public lead and feedback forms submitted from a vendor's booking pages."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from studio.constants import ContactChannel, LeadStatus
from studio.errors import GENERIC_FORM_FAILURE, AppError
from studio.extensions import db
from studio.models import Lead, User
from studio.services.feedback_service import FeedbackService
from studio.validators import clean_text, parse_date, require

logger = logging.getLogger(__name__)

LEAD_FIELDS = {
    "name": "Nama lengkap",
    "whatsapp": "Nomor WhatsApp",
    "event_type": "Jenis acara",
    "event_location": "Lokasi acara",
}


class PublicFormService:
    def __init__(self, vendor_id, notifications=None):
        self.vendor_id = vendor_id
        self.notifications = notifications

    @staticmethod
    def get_vendor(vendor_id):
        vendor = db.session.get(User, vendor_id)
        if vendor is None or not vendor.is_active_user:
            raise AppError("Vendor tidak ditemukan.", 404)
        return vendor

    @staticmethod
    def lead_notes(event_type, event_date, event_location, message=""):
        lines = [
            f"Jenis Acara: {event_type}",
            f"Tanggal Acara: {event_date.strftime('%d/%m/%Y')}",
            f"Lokasi Acara: {event_location}",
        ]
        if message:
            lines.append(f"Pesan: {message}")
        return "\n".join(lines)

    def submit_lead(self, payload):
        values = require(payload, LEAD_FIELDS)
        event_date = parse_date(payload.get("event_date"), "Tanggal acara")

        lead = Lead(
            user_id=self.vendor_id,
            name=values["name"],
            contact_channel=ContactChannel.WEBSITE,
            location=values["event_location"],
            status=LeadStatus.DISCUSSION,
            date=event_date,
            notes=self.lead_notes(
                values["event_type"], event_date, values["event_location"], clean_text(payload.get("message"))
            ),
            whatsapp=values["whatsapp"],
        )
        try:
            db.session.add(lead)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Public lead form failed for vendor %s", self.vendor_id)
            raise AppError(GENERIC_FORM_FAILURE, 500) from exc

        self._notify("Prospek baru", f"{lead.name} mengirim formulir prospek untuk acara {values['event_type']}.")
        return lead

    def submit_feedback(self, payload):
        try:
            feedback = FeedbackService.create_feedback(self.vendor_id, payload)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Public feedback form failed for vendor %s", self.vendor_id)
            raise AppError(GENERIC_FORM_FAILURE, 500) from exc

        self._notify("Feedback baru", f"{feedback.client_name} memberikan rating {feedback.rating}/5.")
        return feedback

    def _notify(self, title, message):
        if self.notifications is None:
            return
        try:
            self.notifications.notify(title, message)
        except Exception:
            logger.warning("Notification '%s' for vendor %s could not be recorded", title, self.vendor_id, exc_info=True)
