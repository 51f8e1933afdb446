from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class PromoCode(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "promo_codes"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    code = db.Column(db.String(48), nullable=False)
    discount_type = db.Column(db.String(16), nullable=False)
    discount_value = db.Column(db.Numeric(14, 2), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    usage_count = db.Column(db.Integer, nullable=False, default=0)
    max_usage = db.Column(db.Integer, nullable=True)
    expiry_date = db.Column(db.DateTime(timezone=True), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("user_id", "code", name="uq_promo_code_user_code"),
        db.CheckConstraint("usage_count >= 0", name="ck_promo_usage_non_negative"),
    )
