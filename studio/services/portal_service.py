from studio.errors import AppError
from studio.models import Client, Project, TeamMember
from studio.serializers import client_to_dict, project_to_dict, team_member_to_dict
from studio.services.profile_service import ProfileService


def _studio_summary(vendor_id):
    profile = ProfileService.get_profile(vendor_id)
    return {
        "company_name": profile.company_name,
        "email": profile.email,
        "phone": profile.phone,
        "brand_color": profile.brand_color,
        "logo_base64": profile.logo_base64,
        "currency_locale": profile.currency_locale,
        "currency_code": profile.currency_code,
    }


class PortalService:
    """Read-only views resolved from a portal access id instead of a login."""

    @staticmethod
    def client_portal(access_id):
        client = Client.query.filter_by(portal_access_id=access_id).first()
        if client is None:
            raise AppError("Portal tidak ditemukan.", 404)

        projects = client.projects.order_by(Project.date.desc()).all()
        data = client_to_dict(client)
        data.pop("portal_access_id", None)
        return {
            "client": data,
            "projects": [project_to_dict(project) for project in projects],
            "studio": _studio_summary(client.user_id),
        }

    @staticmethod
    def freelancer_portal(access_id):
        member = TeamMember.query.filter_by(portal_access_id=access_id).first()
        if member is None:
            raise AppError("Portal tidak ditemukan.", 404)

        data = team_member_to_dict(member)
        data.pop("portal_access_id", None)
        return {"member": data, "studio": _studio_summary(member.user_id)}
