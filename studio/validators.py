"""Input parsing shared by the dashboard and public form services.

Every helper raises ``ValidationError`` with a user-facing message.
"""

import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

from studio.errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def clean_text(value):
    if value is None:
        return ""
    return str(value).strip()


def require(payload, labels):
    """Check required text fields. ``labels`` maps field name to display label."""
    values = {name: clean_text(payload.get(name)) for name in labels}
    missing = [label for name, label in labels.items() if not values[name]]
    if missing:
        raise ValidationError(f"Wajib diisi: {', '.join(missing)}.")
    return values


def require_text(value, label):
    text = clean_text(value)
    if not text:
        raise ValidationError(f"Wajib diisi: {label}.")
    return text


def validate_email(value, required=True):
    email = clean_text(value).lower()
    if not email and not required:
        return ""
    if not EMAIL_RE.match(email):
        raise ValidationError("Alamat email tidak valid.")
    return email


def parse_amount(raw, label, default="0"):
    if raw is None or raw == "":
        return Decimal(default)
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{label} harus berupa angka.") from exc
    if not value.is_finite():
        raise ValidationError(f"{label} harus berupa angka.")
    if value < 0:
        raise ValidationError(f"{label} tidak boleh negatif.")
    return value


def parse_int(raw, label, minimum=None, maximum=None, allow_none=False):
    if raw is None or raw == "":
        if allow_none:
            return None
        raise ValidationError(f"Wajib diisi: {label}.")
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{label} harus berupa bilangan bulat.") from exc
    if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
        raise ValidationError(f"{label} di luar batas yang diizinkan.")
    return value


def parse_date(raw, label="Tanggal", default_today=True):
    if raw is None or raw == "":
        if default_today:
            return date.today()
        return None
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip()[:10])
    except ValueError as exc:
        raise ValidationError(f"{label} tidak valid.") from exc


def parse_datetime(raw, label="Tanggal"):
    if raw is None or raw == "":
        return None
    try:
        value = datetime.fromisoformat(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"{label} tidak valid.") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def parse_id_list(raw):
    if raw is None or raw == "":
        return []
    if isinstance(raw, (str, int)):
        raw = [raw]
    ids = []
    for item in raw:
        ids.extend(part.strip() for part in str(item).split(",") if part.strip())
    return ids


def parse_bool(raw, default=False):
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def one_of(value, allowed, label):
    if value not in allowed:
        raise ValidationError(f"{label} tidak valid.")
    return value
