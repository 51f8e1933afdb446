from datetime import date

from studio.constants import SatisfactionLevel
from studio.extensions import db
from studio.models import ClientFeedback
from studio.validators import clean_text, parse_int, require_text


def satisfaction_for(rating):
    if rating >= 5:
        return SatisfactionLevel.VERY_SATISFIED
    if rating == 4:
        return SatisfactionLevel.SATISFIED
    if rating == 3:
        return SatisfactionLevel.NEUTRAL
    return SatisfactionLevel.UNSATISFIED


class FeedbackService:
    @staticmethod
    def list_feedback(vendor_id):
        return ClientFeedback.owned_by(vendor_id).order_by(ClientFeedback.date.desc(), ClientFeedback.id.desc()).all()

    @staticmethod
    def create_feedback(vendor_id, payload):
        rating = parse_int(payload.get("rating"), "Rating", minimum=1, maximum=5)
        feedback = ClientFeedback(
            user_id=vendor_id,
            client_name=require_text(payload.get("client_name"), "Nama"),
            rating=rating,
            satisfaction=satisfaction_for(rating),
            feedback=clean_text(payload.get("feedback")),
            date=date.today(),
        )
        db.session.add(feedback)
        db.session.commit()
        return feedback
