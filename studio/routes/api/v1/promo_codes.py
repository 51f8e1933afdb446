from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.serializers import promo_code_to_dict
from studio.services import PromoCodeService

api_promo_code_bp = Blueprint("api_promo_code", __name__)


@api_promo_code_bp.get("")
@login_required
@vendor_required
def list_promo_codes():
    return jsonify([promo_code_to_dict(row) for row in PromoCodeService.list_promo_codes(current_user.id)])


@api_promo_code_bp.post("")
@login_required
@vendor_required
def create_promo_code():
    promo = PromoCodeService.create_promo_code(current_user.id, request.get_json(silent=True) or {})
    return jsonify(promo_code_to_dict(promo)), 201


@api_promo_code_bp.patch("/<int:promo_id>")
@login_required
@vendor_required
def update_promo_code(promo_id):
    promo = PromoCodeService.update_promo_code(current_user.id, promo_id, request.get_json(silent=True) or {})
    return jsonify(promo_code_to_dict(promo))


@api_promo_code_bp.delete("/<int:promo_id>")
@login_required
@vendor_required
def delete_promo_code(promo_id):
    PromoCodeService.delete_promo_code(current_user.id, promo_id)
    return jsonify({"ok": True})
