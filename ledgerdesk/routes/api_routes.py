"""
JSON endpoints used by the page scripts.
"""

from flask import Blueprint, request, jsonify, url_for

from ..services import fee_service
from ..utils.money import normalize_invoice_number

api_bp = Blueprint('api', __name__)


@api_bp.route('/fees/lookup')
def fee_lookup():
    """Tell the create-fee modal whether the typed invoice number is already recorded."""
    invoice_number = normalize_invoice_number(request.args.get('invoice_number'))
    if not invoice_number:
        return jsonify({'error': 'invoice_number is required'}), 400

    existing = fee_service.find_existing(invoice_number)
    return jsonify({
        'exists': existing is not None,
        'invoice_number': invoice_number,
        'edit_url': url_for('fees.edit_fee', invoice_number=invoice_number) if existing else None,
    })
