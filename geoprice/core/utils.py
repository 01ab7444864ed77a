import hashlib
from datetime import date

_CURRENCY_SYMBOLS = {"USD": "$", "CAD": "CA$", "AUD": "A$", "EUR": "€", "GBP": "£", "JPY": "¥"}
_COMPACT_UNITS = (("", 1.0), ("K", 1e3), ("M", 1e6), ("B", 1e9), ("T", 1e12))

def currency_prefix(currency: str) -> str:
    code = currency.upper()
    return _CURRENCY_SYMBOLS.get(code, f"{code} ")

def format_currency(amount: float, currency: str = "USD") -> str:
    """`1234.5` → `$1,234.50`; negatives keep the sign in front of the symbol."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_prefix(currency)}{abs(amount):,.2f}"

def format_compact_currency(amount: float, currency: str = "USD") -> str:
    """
    Short axis labels for charts:
    - 950 → $950
    - 350_000 → $350K
    - 1_280_000 → $1.3M
    """
    sign = "-" if amount < 0 else ""
    value = abs(amount)
    idx = 0
    for i, (_, threshold) in enumerate(_COMPACT_UNITS):
        if value >= threshold:
            idx = i
    scaled = value / _COMPACT_UNITS[idx][1]
    # 999.7 would print as $1000 and 999_950 as 1000K; promote to the next unit
    if idx < len(_COMPACT_UNITS) - 1 and round(scaled) >= 1000:
        idx += 1
        scaled = value / _COMPACT_UNITS[idx][1]
    if idx and scaled < 10:
        text = f"{scaled:.1f}".rstrip("0").rstrip(".")
    else:
        text = f"{scaled:.0f}"
    return f"{sign}{currency_prefix(currency)}{text}{_COMPACT_UNITS[idx][0]}"

def format_number(value: float, decimals: int = 2) -> str:
    """Thousands separators, trailing zeros dropped: 1200.0 → 1,200; 1234.5 → 1,234.5"""
    text = f"{value:,.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text

def format_date(d: date) -> str:
    """US-style short date (1/5/2024)."""
    return f"{d.month}/{d.day}/{d.year}"

def month_label(d: date) -> str:
    """Chart label for a month bucket: Jan 24."""
    return d.strftime("%b %y")

def digest(*parts: str) -> str:
    """Stable cache key fragment for a tuple of strings."""
    h = hashlib.sha256()
    for p in parts:
        h.update(p.encode("utf-8"))
        h.update(b"\x00")
    return h.hexdigest()

def weak_etag(payload_bytes: bytes) -> str:
    """Weak ETag for client-side conditional requests."""
    h = hashlib.sha256(payload_bytes).hexdigest()[:24]
    return f'W/"{h}"'
