from studio.extensions import db
from studio.models.base import PKType, TimestampMixin


class Profile(TimestampMixin, db.Model):
    __tablename__ = "profiles"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    user_id = db.Column(PKType, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    full_name = db.Column(db.String(120), nullable=False, default="")
    email = db.Column(db.String(255), nullable=False, default="")
    phone = db.Column(db.String(32), nullable=False, default="")
    company_name = db.Column(db.String(160), nullable=False, default="")
    website = db.Column(db.String(255), nullable=True)
    address = db.Column(db.Text, nullable=True)
    bank_account = db.Column(db.String(255), nullable=True)
    authorized_signer = db.Column(db.String(120), nullable=True)
    id_number = db.Column(db.String(64), nullable=True)
    bio = db.Column(db.Text, nullable=True)
    brand_color = db.Column(db.String(16), nullable=True)
    logo_base64 = db.Column(db.Text, nullable=True)
    currency_locale = db.Column(db.String(16), nullable=True)
    currency_code = db.Column(db.String(3), nullable=True)

    # Lists and nested settings; missing values fall back to ProfileService defaults.
    income_categories = db.Column(db.JSON, nullable=True)
    expense_categories = db.Column(db.JSON, nullable=True)
    project_types = db.Column(db.JSON, nullable=True)
    event_types = db.Column(db.JSON, nullable=True)
    project_status_config = db.Column(db.JSON, nullable=True)
    notification_settings = db.Column(db.JSON, nullable=True)
    public_page_config = db.Column(db.JSON, nullable=True)
    terms_and_conditions = db.Column(db.Text, nullable=True)
    contract_template = db.Column(db.Text, nullable=True)
    booking_form_template = db.Column(db.Text, nullable=True)

    user = db.relationship("User", back_populates="profile")
