from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.serializers import lead_to_dict
from studio.services import LeadService

api_lead_bp = Blueprint("api_lead", __name__)


@api_lead_bp.get("")
@login_required
@vendor_required
def list_leads():
    rows = LeadService.list_leads(current_user.id, status=request.args.get("status"))
    return jsonify([lead_to_dict(row) for row in rows])


@api_lead_bp.post("")
@login_required
@vendor_required
def create_lead():
    lead = LeadService.create_lead(current_user.id, request.get_json(silent=True) or {})
    return jsonify(lead_to_dict(lead)), 201


@api_lead_bp.patch("/<int:lead_id>")
@login_required
@vendor_required
def update_lead(lead_id):
    lead = LeadService.update_lead(current_user.id, lead_id, request.get_json(silent=True) or {})
    return jsonify(lead_to_dict(lead))


@api_lead_bp.delete("/<int:lead_id>")
@login_required
@vendor_required
def delete_lead(lead_id):
    LeadService.delete_lead(current_user.id, lead_id)
    return jsonify({"ok": True})
