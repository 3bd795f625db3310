"""Products blueprint for JSON CRUD operations."""
from flask import Blueprint, jsonify

from hardware_shop.database import get_session
from hardware_shop.decorators.permissions import admin_only
from hardware_shop.middleware import require_login
from hardware_shop.services import ledger_service
from hardware_shop.utils.http import get_json_body

products_bp = Blueprint('products', __name__, url_prefix='/products')


@products_bp.route('', methods=['GET'])
@require_login
def list_products():
    """List all products with vendor name."""
    return jsonify(ledger_service.list_products(get_session()))


@products_bp.route('/<int:product_id>', methods=['GET'])
@require_login
def get_product(product_id):
    """Get a single product."""
    product = ledger_service.get_product(get_session(), product_id)
    return jsonify(product.to_dict())


@products_bp.route('', methods=['POST'])
@admin_only
def create_product():
    """Create a product."""
    product = ledger_service.create_product(get_session(), get_json_body())

    body = product.to_dict()
    body['message'] = 'Product created successfully'
    return jsonify(body), 201


@products_bp.route('/<int:product_id>', methods=['PUT'])
@admin_only
def update_product(product_id):
    """Update all fields of a product."""
    product = ledger_service.update_product(get_session(), product_id, get_json_body())

    body = product.to_dict()
    body['message'] = 'Product updated successfully'
    return jsonify(body)


@products_bp.route('/<int:product_id>', methods=['DELETE'])
@admin_only
def delete_product(product_id):
    """Delete a product that has no sales."""
    return jsonify(ledger_service.delete_product(get_session(), product_id))
