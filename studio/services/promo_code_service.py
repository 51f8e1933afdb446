from decimal import Decimal

from studio.constants import DiscountType
from studio.errors import AppError, ValidationError
from studio.extensions import db
from studio.models import PromoCode
from studio.services.common import delete_owned, get_owned
from studio.services.pricing import normalize_code
from studio.validators import one_of, parse_amount, parse_bool, parse_datetime, parse_int


class PromoCodeService:
    @staticmethod
    def _discount(discount_type, raw_value):
        if raw_value in (None, ""):
            raise ValidationError("Wajib diisi: Nilai diskon.")
        value = parse_amount(raw_value, "Nilai diskon")
        if discount_type == DiscountType.PERCENTAGE and value > Decimal("100"):
            raise ValidationError("Diskon persentase tidak boleh melebihi 100.")
        return value

    @staticmethod
    def _ensure_unique(vendor_id, code, exclude_id=None):
        query = PromoCode.owned_by(vendor_id).filter(PromoCode.code == code)
        if exclude_id is not None:
            query = query.filter(PromoCode.id != exclude_id)
        if query.first():
            raise AppError("Kode promo sudah digunakan.", 409)

    @staticmethod
    def list_promo_codes(vendor_id):
        return PromoCode.owned_by(vendor_id).order_by(PromoCode.created_at.desc()).all()

    @staticmethod
    def create_promo_code(vendor_id, payload):
        code = normalize_code(payload.get("code"))
        if not code:
            raise ValidationError("Wajib diisi: Kode promo.")
        discount_type = one_of(payload.get("discount_type"), DiscountType.ALL, "Jenis diskon")
        PromoCodeService._ensure_unique(vendor_id, code)

        promo = PromoCode(
            user_id=vendor_id,
            code=code,
            discount_type=discount_type,
            discount_value=PromoCodeService._discount(discount_type, payload.get("discount_value")),
            is_active=parse_bool(payload.get("is_active"), default=True),
            usage_count=0,
            max_usage=parse_int(payload.get("max_usage"), "Batas pemakaian", minimum=1, allow_none=True),
            expiry_date=parse_datetime(payload.get("expiry_date"), "Tanggal kedaluwarsa"),
        )
        db.session.add(promo)
        db.session.commit()
        return promo

    @staticmethod
    def update_promo_code(vendor_id, promo_id, payload):
        promo = get_owned(PromoCode, vendor_id, promo_id, "Kode promo")

        if "code" in payload:
            code = normalize_code(payload.get("code"))
            if not code:
                raise ValidationError("Wajib diisi: Kode promo.")
            PromoCodeService._ensure_unique(vendor_id, code, exclude_id=promo.id)
            promo.code = code
        if "discount_type" in payload:
            promo.discount_type = one_of(payload.get("discount_type"), DiscountType.ALL, "Jenis diskon")
        if "discount_value" in payload or "discount_type" in payload:
            promo.discount_value = PromoCodeService._discount(
                promo.discount_type, payload.get("discount_value", promo.discount_value)
            )
        if "is_active" in payload:
            promo.is_active = parse_bool(payload.get("is_active"), default=promo.is_active)
        if "max_usage" in payload:
            promo.max_usage = parse_int(payload.get("max_usage"), "Batas pemakaian", minimum=1, allow_none=True)
        if "expiry_date" in payload:
            promo.expiry_date = parse_datetime(payload.get("expiry_date"), "Tanggal kedaluwarsa")

        db.session.commit()
        return promo

    @staticmethod
    def delete_promo_code(vendor_id, promo_id):
        return delete_owned(PromoCode, vendor_id, promo_id, "Kode promo")
