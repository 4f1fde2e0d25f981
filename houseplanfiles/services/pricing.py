"""Request-scoped currency preference."""

from __future__ import annotations

from flask import current_app, request

from houseplanfiles.domain import currency


def current_currency() -> str:
    """``?currency=`` wins over the cookie; unknown codes use the default."""
    default = current_app.config.get('DEFAULT_CURRENCY', currency.DEFAULT_CURRENCY)
    explicit = request.args.get('currency')
    if explicit:
        return currency.normalize_code(explicit, default)
    return currency.normalize_code(request.cookies.get(current_app.config['CURRENCY_COOKIE']), default)


def set_currency_cookie(response, code: str):
    response.set_cookie(
        current_app.config['CURRENCY_COOKIE'],
        code,
        max_age=60 * 60 * 24 * 365,
        samesite='Lax',
        secure=not current_app.debug,
    )
    return response


def price_payload(amount_inr, code: str) -> dict:
    return {
        'currency': code,
        'amount': round(currency.convert(amount_inr, code), 2),
        'formatted': currency.format_price(amount_inr, code),
    }
