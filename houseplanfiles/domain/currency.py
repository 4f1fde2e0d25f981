from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    rate: float  # units of this currency per 1 INR


# Prices are stored in INR; rates convert INR into the display currency.
CURRENCIES: dict[str, Currency] = {
    'USD': Currency('USD', '$', 0.011976),
    'EUR': Currency('EUR', '€', 0.011018),
    'GBP': Currency('GBP', '£', 0.009461),
    'INR': Currency('INR', '₹', 1.0),
    'AUD': Currency('AUD', 'A$', 0.017964),
    'CAD': Currency('CAD', 'C$', 0.016407),
    'JPY': Currency('JPY', '¥', 1.88024),
    'AED': Currency('AED', 'د.إ', 0.043952),
    'CNY': Currency('CNY', '¥', 0.086826),
    'SGD': Currency('SGD', 'S$', 0.016168),
}

DEFAULT_CURRENCY = 'USD'
BASE_CURRENCY = 'INR'


def normalize_code(code: Optional[str], default: str = DEFAULT_CURRENCY) -> str:
    """Return a supported upper-case code, falling back to ``default``."""
    candidate = (code or '').strip().upper()
    return candidate if candidate in CURRENCIES else default


def convert(amount_inr, code: str) -> float:
    """Convert an INR amount into ``code``. Non-numeric amounts convert to 0."""
    try:
        value = float(amount_inr or 0)
    except (TypeError, ValueError):
        return 0.0
    return value * CURRENCIES[normalize_code(code)].rate


def format_price(amount_inr, code: str) -> str:
    """Convert and format, e.g. ``$59.88`` or ``¥9,401``."""
    currency = CURRENCIES[normalize_code(code)]
    value = convert(amount_inr, currency.code)
    if currency.code == 'JPY':
        return f"{currency.symbol}{value:,.0f}"
    return f"{currency.symbol}{value:,.2f}"


def toggle(code: str) -> str:
    """Quick switcher: INR flips to USD, anything else flips to INR."""
    return 'USD' if normalize_code(code) == 'INR' else 'INR'


def currency_table() -> list[dict]:
    return [
        {'code': c.code, 'symbol': c.symbol, 'rate': c.rate}
        for c in CURRENCIES.values()
    ]
