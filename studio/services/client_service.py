from studio.constants import ClientStatus, ClientType
from studio.extensions import db
from studio.models import Client
from studio.models.base import utcnow
from studio.services.common import delete_owned, get_owned, text_or_none
from studio.store import new_portal_access_id
from studio.validators import clean_text, one_of, parse_date, require_text, validate_email


class ClientService:
    @staticmethod
    def list_clients(vendor_id, status=None):
        query = Client.owned_by(vendor_id)
        if status:
            query = query.filter(Client.status == status)
        return query.order_by(Client.created_at.desc()).all()

    @staticmethod
    def get_client(vendor_id, client_id):
        return get_owned(Client, vendor_id, client_id, "Klien")

    @staticmethod
    def create_client(vendor_id, payload):
        name = require_text(payload.get("name"), "Nama klien")

        client = Client(
            user_id=vendor_id,
            name=name,
            email=validate_email(payload.get("email"), required=False),
            phone=clean_text(payload.get("phone")),
            whatsapp=text_or_none(payload, "whatsapp"),
            instagram=text_or_none(payload, "instagram"),
            client_type=one_of(payload.get("client_type") or ClientType.DIRECT, ClientType.ALL, "Jenis klien"),
            status=one_of(payload.get("status") or ClientStatus.ACTIVE, ClientStatus.ALL, "Status klien"),
            since=parse_date(payload.get("since"), "Tanggal bergabung"),
            last_contact=utcnow(),
            portal_access_id=new_portal_access_id(),
        )
        db.session.add(client)
        db.session.commit()
        return client

    @staticmethod
    def update_client(vendor_id, client_id, payload):
        client = get_owned(Client, vendor_id, client_id, "Klien")

        if "name" in payload:
            client.name = require_text(payload.get("name"), "Nama klien")
        if "email" in payload:
            client.email = validate_email(payload.get("email"), required=False)
        if "phone" in payload:
            client.phone = clean_text(payload.get("phone"))
        for name in ("whatsapp", "instagram"):
            if name in payload:
                setattr(client, name, text_or_none(payload, name))
        if "client_type" in payload:
            client.client_type = one_of(payload.get("client_type"), ClientType.ALL, "Jenis klien")
        if "status" in payload:
            client.status = one_of(payload.get("status"), ClientStatus.ALL, "Status klien")

        client.last_contact = utcnow()
        db.session.commit()
        return client

    @staticmethod
    def delete_client(vendor_id, client_id):
        return delete_owned(Client, vendor_id, client_id, "Klien")
