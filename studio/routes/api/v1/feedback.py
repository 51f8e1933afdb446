from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.serializers import feedback_to_dict
from studio.services import FeedbackService

api_feedback_bp = Blueprint("api_feedback", __name__)


@api_feedback_bp.get("")
@login_required
@vendor_required
def list_feedback():
    return jsonify([feedback_to_dict(row) for row in FeedbackService.list_feedback(current_user.id)])
