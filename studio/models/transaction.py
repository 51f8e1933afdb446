from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class Transaction(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "transactions"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    project_id = db.Column(PKType, db.ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    description = db.Column(db.String(255), nullable=False)
    amount = db.Column(db.Numeric(14, 2), nullable=False)
    type = db.Column(db.String(24), nullable=False, index=True)
    category = db.Column(db.String(80), nullable=False, default="")
    method = db.Column(db.String(48), nullable=False, default="")

    project = db.relationship("Project", back_populates="transactions")

    __table_args__ = (db.CheckConstraint("amount >= 0", name="ck_transaction_amount_non_negative"),)
