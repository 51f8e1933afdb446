from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.routes.api.v1.public import forget_public_catalog
from studio.services import ProfileService

api_profile_bp = Blueprint("api_profile", __name__)


@api_profile_bp.get("")
@login_required
@vendor_required
def get_profile():
    return jsonify(ProfileService.get_profile(current_user.id).to_dict())


@api_profile_bp.put("")
@login_required
@vendor_required
def update_profile():
    payload = request.get_json(silent=True) or {}
    profile = ProfileService.update_profile(current_user.id, payload)
    # The public catalog embeds studio branding and terms.
    forget_public_catalog(current_user.id)
    return jsonify(profile.to_dict())
