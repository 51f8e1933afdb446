from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class AddOn(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "add_ons"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    name = db.Column(db.String(160), nullable=False)
    price = db.Column(db.Numeric(14, 2), nullable=False)

    __table_args__ = (db.CheckConstraint("price >= 0", name="ck_addon_price_non_negative"),)
