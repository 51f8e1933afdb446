from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOLS = {
    "IDR": "Rp",
    "USD": "$",
    "SGD": "S$",
    "MYR": "RM",
    "EUR": "€",
}

# locale -> (group separator, space between symbol and digits)
LOCALE_PATTERNS = {
    "id-ID": (".", True),
    "en-US": (",", False),
    "en-GB": (",", False),
    "ms-MY": (",", False),
}


def to_decimal(value, default="0"):
    if value is None or value == "":
        return Decimal(default)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def plain_number(value):
    """Render a decimal without trailing zeros: 10.00 -> "10", 12.50 -> "12.5"."""
    value = to_decimal(value)
    if value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return format(value.normalize(), "f")


def format_currency(amount, locale="id-ID", currency="IDR"):
    """Whole-unit localized currency string, e.g. ``Rp 4.950.000``."""
    separator, spaced = LOCALE_PATTERNS.get(locale, LOCALE_PATTERNS["en-US"])
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    whole = to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    digits = f"{abs(whole):,}".replace(",", separator)
    sign = "-" if whole < 0 else ""
    if spaced:
        return f"{sign}{symbol} {digits}"
    return f"{sign}{symbol}{digits}"
