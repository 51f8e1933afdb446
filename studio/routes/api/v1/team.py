from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.serializers import team_member_to_dict
from studio.services import TeamService

api_team_bp = Blueprint("api_team", __name__)


@api_team_bp.get("")
@login_required
@vendor_required
def list_members():
    return jsonify([team_member_to_dict(row) for row in TeamService.list_members(current_user.id)])


@api_team_bp.post("")
@login_required
@vendor_required
def create_member():
    member = TeamService.create_member(current_user.id, request.get_json(silent=True) or {})
    return jsonify(team_member_to_dict(member)), 201


@api_team_bp.delete("/<int:member_id>")
@login_required
@vendor_required
def delete_member(member_id):
    TeamService.delete_member(current_user.id, member_id)
    return jsonify({"ok": True})
