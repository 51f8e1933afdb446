from flask import Blueprint, jsonify

from studio.services import PortalService

api_portal_bp = Blueprint("api_portal", __name__)


@api_portal_bp.get("/client/<access_id>")
def client_portal(access_id):
    return jsonify(PortalService.client_portal(access_id))


@api_portal_bp.get("/freelancer/<access_id>")
def freelancer_portal(access_id):
    return jsonify(PortalService.freelancer_portal(access_id))
