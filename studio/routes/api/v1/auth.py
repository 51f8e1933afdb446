from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from studio.services import AuthService

api_auth_bp = Blueprint("api_auth", __name__)


@api_auth_bp.post("/register")
def api_register():
    payload = request.get_json(silent=True) or {}
    user = AuthService.register_vendor(
        full_name=payload.get("full_name", ""),
        email=payload.get("email", ""),
        password=payload.get("password", ""),
        company_name=payload.get("company_name", ""),
    )
    login_user(user)
    return jsonify(AuthService.user_to_dict(user)), 201


@api_auth_bp.post("/login")
def api_login():
    payload = request.get_json(silent=True) or {}
    user = AuthService.authenticate_user(payload.get("email", ""), payload.get("password", ""))
    login_user(user, remember=bool(payload.get("remember")))
    return jsonify(AuthService.user_to_dict(user))


@api_auth_bp.post("/logout")
@login_required
def api_logout():
    logout_user()
    return jsonify({"ok": True})


@api_auth_bp.get("/me")
@login_required
def api_me():
    return jsonify(AuthService.user_to_dict(current_user))
