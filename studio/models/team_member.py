from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class TeamMember(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "team_members"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    name = db.Column(db.String(160), nullable=False)
    role = db.Column(db.String(80), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    standard_fee = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    portal_access_id = db.Column(db.String(64), nullable=False, unique=True, index=True)
