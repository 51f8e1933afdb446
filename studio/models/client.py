from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class Client(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "clients"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    name = db.Column(db.String(160), nullable=False)
    email = db.Column(db.String(255), nullable=False, default="")
    phone = db.Column(db.String(32), nullable=False, default="")
    whatsapp = db.Column(db.String(32), nullable=True)
    instagram = db.Column(db.String(120), nullable=True)
    client_type = db.Column(db.String(24), nullable=False)
    status = db.Column(db.String(24), nullable=False, index=True)
    since = db.Column(db.Date, nullable=False)
    last_contact = db.Column(db.DateTime(timezone=True), nullable=True)
    portal_access_id = db.Column(db.String(64), nullable=False, unique=True, index=True)

    owner = db.relationship("User", back_populates="clients")
    projects = db.relationship("Project", back_populates="client", lazy="dynamic", cascade="all, delete-orphan")
