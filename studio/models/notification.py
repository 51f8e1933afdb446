from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class Notification(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "notifications"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    token = db.Column(db.String(48), nullable=False, unique=True, index=True)
    title = db.Column(db.String(180), nullable=False)
    message = db.Column(db.Text, nullable=False)
    is_read = db.Column(db.Boolean, nullable=False, default=False, index=True)

    user = db.relationship("User", back_populates="notifications")
