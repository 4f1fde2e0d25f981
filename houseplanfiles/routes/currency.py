"""Currency preference endpoints backed by the ``currency`` cookie."""

from flask import Blueprint, jsonify, request

from houseplanfiles.domain import currency as currency_rules
from houseplanfiles.services.pricing import current_currency, set_currency_cookie


currency_bp = Blueprint('currency', __name__)


def _state(code):
    selected = currency_rules.CURRENCIES[code]
    return {
        'currency': selected.code,
        'symbol': selected.symbol,
        'rate': selected.rate,
        'currencies': currency_rules.currency_table(),
    }


@currency_bp.route('', methods=['GET'])
def get_currency():
    return jsonify(_state(current_currency()))


@currency_bp.route('', methods=['POST'])
def set_currency():
    payload = request.get_json(silent=True) or {}
    requested = (payload.get('currency') or request.form.get('currency') or '').strip().upper()
    if requested not in currency_rules.CURRENCIES:
        return jsonify({
            'message': f'Unsupported currency. Choose one of: {", ".join(currency_rules.CURRENCIES)}',
        }), 400
    response = jsonify(_state(requested))
    return set_currency_cookie(response, requested)


@currency_bp.route('/toggle', methods=['POST'])
def toggle_currency():
    code = currency_rules.toggle(current_currency())
    response = jsonify(_state(code))
    return set_currency_cookie(response, code)
