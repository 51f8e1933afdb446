from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.serializers import client_to_dict
from studio.services import ClientService

api_client_bp = Blueprint("api_client", __name__)


@api_client_bp.get("")
@login_required
@vendor_required
def list_clients():
    rows = ClientService.list_clients(current_user.id, status=request.args.get("status"))
    return jsonify([client_to_dict(row) for row in rows])


@api_client_bp.post("")
@login_required
@vendor_required
def create_client():
    client = ClientService.create_client(current_user.id, request.get_json(silent=True) or {})
    return jsonify(client_to_dict(client)), 201


@api_client_bp.get("/<int:client_id>")
@login_required
@vendor_required
def get_client(client_id):
    return jsonify(client_to_dict(ClientService.get_client(current_user.id, client_id)))


@api_client_bp.patch("/<int:client_id>")
@login_required
@vendor_required
def update_client(client_id):
    client = ClientService.update_client(current_user.id, client_id, request.get_json(silent=True) or {})
    return jsonify(client_to_dict(client))


@api_client_bp.delete("/<int:client_id>")
@login_required
@vendor_required
def delete_client(client_id):
    ClientService.delete_client(current_user.id, client_id)
    return jsonify({"ok": True})
