"""Display formatting helpers (pt-BR).

Used by the dashboard CLI and by anything rendering records for people:
currency in BRL, dates with Portuguese month abbreviations, phone masks
and text truncation. Also hosts ``generate_id`` for opaque record ids.
"""

import re
import secrets
import time
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Union


DateLike = Union[datetime, date, str]

_MONTHS_SHORT = (
    "jan.", "fev.", "mar.", "abr.", "mai.", "jun.",
    "jul.", "ago.", "set.", "out.", "nov.", "dez.",
)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

_PHONE_DIGITS = re.compile(r"(\d{3})(\d{3})(\d{4})")

# pt-BR separates the currency symbol with a no-break space
NBSP = "\u00a0"


def format_currency(value: Union[Decimal, int, float, str]) -> str:
    """Format a value as Brazilian reais, e.g. ``R$ 1.299,99``."""
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer, _, cents = f"{abs(amount):,.2f}".partition(".")
    integer = integer.replace(",", ".")
    return f"{sign}R${NBSP}{integer},{cents}"


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_date(value: DateLike) -> str:
    """Format a date as ``15 de jan. de 2023``.

    Timestamps are rendered in their own timezone; no conversion happens.
    """
    dt = _as_datetime(value)
    return f"{dt.day} de {_MONTHS_SHORT[dt.month - 1]} de {dt.year}"


def format_datetime(value: DateLike) -> str:
    """Format a timestamp as ``15 de jan. de 2023, 10:30``."""
    dt = _as_datetime(value)
    return f"{format_date(dt)}, {dt.hour:02d}:{dt.minute:02d}"


def format_phone(phone: str) -> str:
    """Mask the first run of ten digits as ``(555) 123-4567``."""
    return _PHONE_DIGITS.sub(r"(\1) \2-\3", phone, count=1)


def truncate_text(text: str, max_length: int = 50) -> str:
    """Cut ``text`` to ``max_length`` characters, appending ``...`` when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Opaque id: base-36 millisecond timestamp followed by a random suffix."""
    return _to_base36(time.time_ns() // 1_000_000) + _to_base36(secrets.randbits(52))
