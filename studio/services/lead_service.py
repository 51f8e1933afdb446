from studio.constants import ContactChannel, LeadStatus
from studio.extensions import db
from studio.models import Lead
from studio.services.common import delete_owned, get_owned, text_or_none
from studio.validators import clean_text, one_of, parse_date, require_text


class LeadService:
    @staticmethod
    def list_leads(vendor_id, status=None):
        query = Lead.owned_by(vendor_id)
        if status:
            query = query.filter(Lead.status == status)
        return query.order_by(Lead.date.desc(), Lead.id.desc()).all()

    @staticmethod
    def create_lead(vendor_id, payload):
        lead = Lead(
            user_id=vendor_id,
            name=require_text(payload.get("name"), "Nama prospek"),
            contact_channel=one_of(
                payload.get("contact_channel") or ContactChannel.OTHER, ContactChannel.ALL, "Sumber kontak"
            ),
            location=clean_text(payload.get("location")),
            status=one_of(payload.get("status") or LeadStatus.DISCUSSION, LeadStatus.ALL, "Status prospek"),
            date=parse_date(payload.get("date"), "Tanggal"),
            notes=text_or_none(payload, "notes"),
            whatsapp=text_or_none(payload, "whatsapp"),
        )
        db.session.add(lead)
        db.session.commit()
        return lead

    @staticmethod
    def update_lead(vendor_id, lead_id, payload):
        lead = get_owned(Lead, vendor_id, lead_id, "Prospek")
        if "name" in payload:
            lead.name = require_text(payload.get("name"), "Nama prospek")
        if "contact_channel" in payload:
            lead.contact_channel = one_of(payload.get("contact_channel"), ContactChannel.ALL, "Sumber kontak")
        if "status" in payload:
            lead.status = one_of(payload.get("status"), LeadStatus.ALL, "Status prospek")
        if "location" in payload:
            lead.location = clean_text(payload.get("location"))
        if "date" in payload:
            lead.date = parse_date(payload.get("date"), "Tanggal")
        for name in ("notes", "whatsapp"):
            if name in payload:
                setattr(lead, name, text_or_none(payload, name))
        db.session.commit()
        return lead

    @staticmethod
    def delete_lead(vendor_id, lead_id):
        return delete_owned(Lead, vendor_id, lead_id, "Prospek")
