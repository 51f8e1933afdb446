from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.routes.api.v1.public import forget_public_catalog
from studio.serializers import addon_to_dict, package_to_dict
from studio.services import PackageService

api_package_bp = Blueprint("api_package", __name__)


@api_package_bp.get("")
@login_required
@vendor_required
def list_packages():
    return jsonify([package_to_dict(row) for row in PackageService.list_packages(current_user.id)])


@api_package_bp.post("")
@login_required
@vendor_required
def create_package():
    package = PackageService.create_package(current_user.id, request.get_json(silent=True) or {})
    forget_public_catalog(current_user.id)
    return jsonify(package_to_dict(package)), 201


@api_package_bp.patch("/<int:package_id>")
@login_required
@vendor_required
def update_package(package_id):
    package = PackageService.update_package(current_user.id, package_id, request.get_json(silent=True) or {})
    forget_public_catalog(current_user.id)
    return jsonify(package_to_dict(package))


@api_package_bp.delete("/<int:package_id>")
@login_required
@vendor_required
def delete_package(package_id):
    PackageService.delete_package(current_user.id, package_id)
    forget_public_catalog(current_user.id)
    return jsonify({"ok": True})


@api_package_bp.get("/addons")
@login_required
@vendor_required
def list_addons():
    return jsonify([addon_to_dict(row) for row in PackageService.list_addons(current_user.id)])


@api_package_bp.post("/addons")
@login_required
@vendor_required
def create_addon():
    addon = PackageService.create_addon(current_user.id, request.get_json(silent=True) or {})
    forget_public_catalog(current_user.id)
    return jsonify(addon_to_dict(addon)), 201


@api_package_bp.patch("/addons/<int:addon_id>")
@login_required
@vendor_required
def update_addon(addon_id):
    addon = PackageService.update_addon(current_user.id, addon_id, request.get_json(silent=True) or {})
    forget_public_catalog(current_user.id)
    return jsonify(addon_to_dict(addon))


@api_package_bp.delete("/addons/<int:addon_id>")
@login_required
@vendor_required
def delete_addon(addon_id):
    PackageService.delete_addon(current_user.id, addon_id)
    forget_public_catalog(current_user.id)
    return jsonify({"ok": True})
