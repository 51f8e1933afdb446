from dataclasses import asdict, dataclass, field
from typing import Optional

from flask import current_app

from studio.errors import AppError
from studio.extensions import db
from studio.models import Profile

DEFAULT_BRAND_COLOR = "#3b82f6"
DEFAULT_INCOME_CATEGORIES = ["DP Proyek", "Pelunasan", "Add-On", "Lainnya"]
DEFAULT_EXPENSE_CATEGORIES = ["Transportasi", "Akomodasi", "Peralatan", "Operasional", "Lainnya"]
DEFAULT_PROJECT_TYPES = ["Pernikahan", "Prewedding", "Engagement", "Birthday", "Corporate", "Lainnya"]
DEFAULT_EVENT_TYPES = ["Meeting Klien", "Survey Lokasi", "Libur", "Workshop", "Lainnya"]
DEFAULT_PROJECT_STATUS_CONFIG = [
    {"id": "1", "name": "Dikonfirmasi", "color": "#3b82f6", "sub_statuses": [], "note": ""},
    {"id": "2", "name": "Dalam Proses", "color": "#8b5cf6", "sub_statuses": [], "note": ""},
    {"id": "3", "name": "Selesai", "color": "#10b981", "sub_statuses": [], "note": ""},
]
DEFAULT_NOTIFICATION_SETTINGS = {"new_project": True, "payment_confirmation": True, "deadline_reminder": True}
DEFAULT_PUBLIC_PAGE_CONFIG = {
    "template": "modern",
    "title": "Paket Layanan Fotografi",
    "introduction": "Pilih paket yang sesuai dengan kebutuhan acara Anda.",
    "gallery_images": [],
}

TEXT_FIELDS = (
    "full_name",
    "email",
    "phone",
    "company_name",
    "website",
    "address",
    "bank_account",
    "authorized_signer",
    "id_number",
    "bio",
    "brand_color",
    "logo_base64",
    "currency_locale",
    "currency_code",
    "terms_and_conditions",
    "contract_template",
    "booking_form_template",
)
LIST_FIELDS = ("income_categories", "expense_categories", "project_types", "event_types", "project_status_config")
DICT_FIELDS = ("notification_settings", "public_page_config")


@dataclass(frozen=True)
class StudioProfile:
    """Studio configuration passed explicitly to whatever needs it."""

    user_id: Optional[int] = None
    full_name: str = ""
    email: str = ""
    phone: str = ""
    company_name: str = ""
    website: str = ""
    address: str = ""
    bank_account: str = ""
    authorized_signer: str = ""
    id_number: str = ""
    bio: str = ""
    brand_color: str = DEFAULT_BRAND_COLOR
    logo_base64: str = ""
    currency_locale: str = "id-ID"
    currency_code: str = "IDR"
    income_categories: list = field(default_factory=lambda: list(DEFAULT_INCOME_CATEGORIES))
    expense_categories: list = field(default_factory=lambda: list(DEFAULT_EXPENSE_CATEGORIES))
    project_types: list = field(default_factory=lambda: list(DEFAULT_PROJECT_TYPES))
    event_types: list = field(default_factory=lambda: list(DEFAULT_EVENT_TYPES))
    project_status_config: list = field(default_factory=lambda: [dict(item) for item in DEFAULT_PROJECT_STATUS_CONFIG])
    notification_settings: dict = field(default_factory=lambda: dict(DEFAULT_NOTIFICATION_SETTINGS))
    public_page_config: dict = field(default_factory=lambda: dict(DEFAULT_PUBLIC_PAGE_CONFIG))
    terms_and_conditions: str = ""
    contract_template: str = ""
    booking_form_template: str = ""

    def to_dict(self):
        return asdict(self)


class ProfileService:
    @staticmethod
    def _defaults():
        config = current_app.config
        return {
            "currency_locale": config.get("DEFAULT_CURRENCY_LOCALE", "id-ID"),
            "currency_code": config.get("DEFAULT_CURRENCY_CODE", "IDR"),
        }

    @staticmethod
    def get_profile(user_id):
        row = Profile.query.filter_by(user_id=user_id).first()
        values = ProfileService._defaults()
        if row is None:
            return StudioProfile(user_id=user_id, **values)

        for name in TEXT_FIELDS + LIST_FIELDS + DICT_FIELDS:
            value = getattr(row, name)
            if value not in (None, "", [], {}):
                values[name] = value
        return StudioProfile(user_id=user_id, **values)

    @staticmethod
    def create_profile(user, company_name=""):
        profile = Profile(
            user_id=user.id,
            full_name=user.full_name,
            email=user.email,
            company_name=(company_name or "").strip(),
            authorized_signer=user.full_name,
            brand_color=DEFAULT_BRAND_COLOR,
        )
        db.session.add(profile)
        return profile

    @staticmethod
    def update_profile(user_id, payload):
        row = Profile.query.filter_by(user_id=user_id).first()
        if row is None:
            row = Profile(user_id=user_id)
            db.session.add(row)

        for name in TEXT_FIELDS:
            if name in payload:
                setattr(row, name, (payload.get(name) or "").strip())
        for name in LIST_FIELDS:
            if name in payload:
                value = payload.get(name)
                if not isinstance(value, list):
                    raise AppError(f"{name} must be a list.", 400)
                setattr(row, name, value)
        for name in DICT_FIELDS:
            if name in payload:
                value = payload.get(name)
                if not isinstance(value, dict):
                    raise AppError(f"{name} must be an object.", 400)
                setattr(row, name, value)

        db.session.commit()
        return ProfileService.get_profile(user_id)
