"""Booking price derivation.

Promo code evaluation, package + add-on totals and payment status
classification. Everything here is pure: the functions take catalog rows
(plain dicts as returned by the record store) and never touch the database.
Promo usage is incremented separately by the booking flow once a booking has
actually been stored.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from studio.constants import DiscountType, PaymentStatus
from studio.formatting import format_currency, plain_number, to_decimal

ZERO = Decimal("0")

PROMO_SUCCESS_MESSAGE = "Kode promo diterapkan! Diskon {label}."
PROMO_INVALID_MESSAGE = "Kode promo tidak valid atau sudah habis."
PROMO_NOT_FOUND_MESSAGE = "Kode promo tidak ditemukan."


@dataclass(frozen=True)
class PromoResult:
    applied: bool = False
    discount_amount: Decimal = ZERO
    discount_label: str = ""
    feedback_kind: str = "none"
    promo_code_id: Optional[int] = None
    message: str = ""

    def to_dict(self):
        return {
            "applied": self.applied,
            "discount_amount": str(self.discount_amount),
            "discount_label": self.discount_label,
            "feedback_kind": self.feedback_kind,
            "message": self.message,
        }


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    discount_label: str = ""

    def to_dict(self):
        return {
            "subtotal": str(self.subtotal),
            "discount": str(self.discount),
            "total": str(self.total),
            "discount_label": self.discount_label,
        }


NO_PROMO = PromoResult()


def normalize_code(raw_code):
    return (raw_code or "").strip().upper()


def _as_aware(value):
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def is_promo_applicable(promo, now=None):
    if not promo.get("is_active"):
        return False
    now = now or datetime.now(timezone.utc)
    expiry = _as_aware(promo.get("expiry_date"))
    if expiry is not None and expiry < now:
        return False
    max_usage = promo.get("max_usage")
    if max_usage is not None and int(promo.get("usage_count") or 0) >= int(max_usage):
        return False
    return True


def find_promo_code(promo_codes, raw_code):
    code = normalize_code(raw_code)
    if not code:
        return None
    for promo in promo_codes:
        if normalize_code(promo.get("code")) == code and promo.get("is_active"):
            return promo
    return None


def evaluate_promo_code(promo_codes, raw_code, base_amount, now=None, locale="id-ID", currency="IDR"):
    if not normalize_code(raw_code):
        return NO_PROMO

    promo = find_promo_code(promo_codes, raw_code)
    if promo is None:
        return PromoResult(feedback_kind="not_found", message=PROMO_NOT_FOUND_MESSAGE)

    if not is_promo_applicable(promo, now=now):
        return PromoResult(
            feedback_kind="invalid",
            promo_code_id=promo.get("id"),
            message=PROMO_INVALID_MESSAGE,
        )

    base = max(to_decimal(base_amount), ZERO)
    value = max(to_decimal(promo.get("discount_value")), ZERO)
    if promo.get("discount_type") == DiscountType.PERCENTAGE:
        value = min(value, Decimal("100"))
        discount = base * value / Decimal("100")
        label = f"{plain_number(value)}%"
    else:
        discount = min(value, base)
        label = format_currency(value, locale=locale, currency=currency)

    return PromoResult(
        applied=True,
        discount_amount=discount,
        discount_label=label,
        feedback_kind="success",
        promo_code_id=promo.get("id"),
        message=PROMO_SUCCESS_MESSAGE.format(label=label),
    )


def selected_addons(addons, selected_addon_ids):
    wanted = {str(addon_id) for addon_id in (selected_addon_ids or [])}
    return [addon for addon in addons if str(addon.get("id")) in wanted]


def compute_total(package, addons, selected_addon_ids, promo_result=None):
    subtotal = to_decimal(package.get("price"))
    for addon in selected_addons(addons, selected_addon_ids):
        subtotal += to_decimal(addon.get("price"))

    promo_result = promo_result or NO_PROMO
    discount = promo_result.discount_amount if promo_result.applied else ZERO
    total = max(ZERO, subtotal - discount)
    return PriceBreakdown(
        subtotal=subtotal,
        discount=discount,
        total=total,
        discount_label=promo_result.discount_label if promo_result.applied else "",
    )


def quote(package, addons, selected_addon_ids, promo_codes, raw_code, now=None, locale="id-ID", currency="IDR"):
    """Evaluate the promo against the pre-discount subtotal and price the booking."""
    subtotal = compute_total(package, addons, selected_addon_ids).subtotal
    promo_result = evaluate_promo_code(promo_codes, raw_code, subtotal, now=now, locale=locale, currency=currency)
    return promo_result, compute_total(package, addons, selected_addon_ids, promo_result)


def classify_payment(total, amount_paid):
    paid = to_decimal(amount_paid)
    if paid <= ZERO:
        return PaymentStatus.BELUM_BAYAR
    if to_decimal(total) - paid > ZERO:
        return PaymentStatus.DP_TERBAYAR
    return PaymentStatus.LUNAS
