from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class Lead(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "leads"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    name = db.Column(db.String(160), nullable=False)
    contact_channel = db.Column(db.String(32), nullable=False)
    location = db.Column(db.String(255), nullable=False, default="")
    status = db.Column(db.String(32), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    whatsapp = db.Column(db.String(32), nullable=True)
