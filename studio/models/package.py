from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class Package(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "packages"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    name = db.Column(db.String(160), nullable=False)
    price = db.Column(db.Numeric(14, 2), nullable=False)
    processing_time = db.Column(db.String(120), nullable=False, default="")
    photographers = db.Column(db.String(255), nullable=True)
    videographers = db.Column(db.String(255), nullable=True)
    physical_items = db.Column(db.JSON, nullable=False, default=list)
    digital_items = db.Column(db.JSON, nullable=False, default=list)
    cover_image = db.Column(db.Text, nullable=True)

    owner = db.relationship("User", back_populates="packages")

    __table_args__ = (db.CheckConstraint("price >= 0", name="ck_package_price_non_negative"),)
