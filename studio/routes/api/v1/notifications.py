from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from studio.services import NotificationService

api_notification_bp = Blueprint("api_notification", __name__)


@api_notification_bp.get("/me")
@login_required
def my_notifications():
    service = NotificationService.for_vendor(current_user.id)
    limit = request.args.get("limit", default=20, type=int)
    items = service.list(limit=min(max(limit, 1), 100))
    return jsonify({"items": [entry.to_dict() for entry in items], "unread": service.unread_count()})


@api_notification_bp.post("/me/read")
@login_required
def mark_all_read():
    updated = NotificationService.for_vendor(current_user.id).mark_all_read()
    return jsonify({"ok": True, "updated": updated})


@api_notification_bp.post("/<token>/read")
@login_required
def mark_read(token):
    if not NotificationService.for_vendor(current_user.id).mark_read(token):
        return jsonify({"error": "Not found"}), 404
    return jsonify({"ok": True})
