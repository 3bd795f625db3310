"""Sales blueprint: record, list and reverse sales."""
from flask import Blueprint, jsonify, request, current_app

from hardware_shop.blueprints.metrics import count_sale
from hardware_shop.database import get_session
from hardware_shop.exceptions import ValidationError, InsufficientStockError
from hardware_shop.middleware import require_login
from hardware_shop.services import ledger_service
from hardware_shop.utils.http import get_json_body

sales_bp = Blueprint('sales', __name__, url_prefix='/sales')


@sales_bp.route('', methods=['GET'])
@require_login
def list_sales():
    """List the most recent sales."""
    limit = current_app.config.get('SALES_LIST_LIMIT', 100)
    return jsonify(ledger_service.list_sales(get_session(), limit=limit))


@sales_bp.route('', methods=['POST'])
@require_login
def create_sale():
    """Record a sale and decrement stock."""
    data = get_json_body()
    try:
        sale = ledger_service.record_sale(get_session(), data.get('product_id'), data.get('quantity'))
    except InsufficientStockError:
        count_sale('insufficient_stock')
        raise
    except ValidationError:
        count_sale('invalid')
        raise
    count_sale('recorded', units=sale.quantity)

    body = sale.to_dict()
    body['message'] = 'Sale recorded successfully'
    return jsonify(body), 201


@sales_bp.route('/<int:sale_id>', methods=['DELETE'])
@require_login
def delete_sale(sale_id):
    """Delete a sale and restore its quantity to stock."""
    result = ledger_service.delete_sale(get_session(), sale_id)
    count_sale('reversed')
    return jsonify(result)


@sales_bp.route('', methods=['DELETE'])
@require_login
def delete_sale_by_query():
    """Delete a sale addressed as ``DELETE /sales?id=<id>``."""
    sale_id = request.args.get('id', type=int)
    if sale_id is None:
        raise ValidationError('Sale id is required')
    result = ledger_service.delete_sale(get_session(), sale_id)
    count_sale('reversed')
    return jsonify(result)
