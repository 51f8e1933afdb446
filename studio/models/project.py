from studio.extensions import db
from studio.models.base import PKType, TimestampMixin, VendorOwnedMixin


class Project(VendorOwnedMixin, TimestampMixin, db.Model):
    __tablename__ = "projects"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    client_id = db.Column(PKType, db.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    package_id = db.Column(PKType, db.ForeignKey("packages.id", ondelete="SET NULL"), nullable=True, index=True)
    promo_code_id = db.Column(PKType, db.ForeignKey("promo_codes.id", ondelete="SET NULL"), nullable=True)

    project_name = db.Column(db.String(200), nullable=False)
    client_name = db.Column(db.String(160), nullable=False)
    project_type = db.Column(db.String(80), nullable=False, default="")
    package_name = db.Column(db.String(160), nullable=False, default="")
    add_ons = db.Column(db.JSON, nullable=False, default=list)
    date = db.Column(db.Date, nullable=False)
    deadline_date = db.Column(db.Date, nullable=True)
    location = db.Column(db.String(255), nullable=False, default="")
    progress = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(48), nullable=False, index=True)
    booking_status = db.Column(db.String(24), nullable=True, index=True)
    rejection_reason = db.Column(db.Text, nullable=True)

    total_cost = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    amount_paid = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    payment_status = db.Column(db.String(24), nullable=False, index=True)
    discount_amount = db.Column(db.Numeric(14, 2), nullable=True)

    notes = db.Column(db.Text, nullable=True)
    dp_proof_url = db.Column(db.Text, nullable=True)
    submission_key = db.Column(db.String(128), nullable=True, unique=True, index=True)

    owner = db.relationship("User", back_populates="projects")
    client = db.relationship("Client", back_populates="projects")
    transactions = db.relationship("Transaction", back_populates="project", lazy="dynamic")

    __table_args__ = (
        db.Index("ix_projects_user_status", "user_id", "status"),
        db.CheckConstraint("progress >= 0 AND progress <= 100", name="ck_project_progress_range"),
    )
