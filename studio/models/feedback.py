from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class ClientFeedback(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "client_feedback"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    client_name = db.Column(db.String(160), nullable=False)
    rating = db.Column(db.SmallInteger, nullable=False)
    satisfaction = db.Column(db.String(24), nullable=False)
    feedback = db.Column(db.Text, nullable=False, default="")
    date = db.Column(db.Date, nullable=False)

    __table_args__ = (db.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating_range"),)
