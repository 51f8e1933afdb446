from studio.extensions import db
from studio.models import TeamMember
from studio.services.common import delete_owned, text_or_none
from studio.store import new_portal_access_id
from studio.validators import parse_amount, require_text, validate_email


class TeamService:
    @staticmethod
    def list_members(vendor_id):
        return TeamMember.owned_by(vendor_id).order_by(TeamMember.name.asc()).all()

    @staticmethod
    def create_member(vendor_id, payload):
        member = TeamMember(
            user_id=vendor_id,
            name=require_text(payload.get("name"), "Nama"),
            role=require_text(payload.get("role"), "Peran"),
            email=validate_email(payload.get("email"), required=False) or None,
            phone=text_or_none(payload, "phone"),
            standard_fee=parse_amount(payload.get("standard_fee"), "Honor standar"),
            portal_access_id=new_portal_access_id(),
        )
        db.session.add(member)
        db.session.commit()
        return member

    @staticmethod
    def delete_member(vendor_id, member_id):
        return delete_owned(TeamMember, vendor_id, member_id, "Anggota tim")
