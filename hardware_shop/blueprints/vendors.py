"""Vendors blueprint for JSON CRUD operations."""
from flask import Blueprint, jsonify, request

from hardware_shop.database import get_session
from hardware_shop.decorators.permissions import admin_only
from hardware_shop.exceptions import ValidationError
from hardware_shop.middleware import require_login
from hardware_shop.services import vendor_service
from hardware_shop.utils.http import get_json_body

vendors_bp = Blueprint('vendors', __name__, url_prefix='/vendors')


@vendors_bp.route('', methods=['GET'])
@require_login
def list_vendors():
    """List all vendors."""
    return jsonify(vendor_service.list_vendors(get_session()))


@vendors_bp.route('', methods=['POST'])
@admin_only
def create_vendor():
    """Create a new vendor."""
    data = get_json_body()
    vendor = vendor_service.create_vendor(get_session(), data.get('name'), data.get('phone'))

    body = vendor.to_dict()
    body['message'] = 'Vendor created successfully'
    return jsonify(body), 201


@vendors_bp.route('/<int:vendor_id>', methods=['DELETE'])
@admin_only
def delete_vendor(vendor_id):
    """Delete a vendor that has no products."""
    return jsonify(vendor_service.delete_vendor(get_session(), vendor_id))


@vendors_bp.route('', methods=['DELETE'])
@admin_only
def delete_vendor_by_query():
    """Delete a vendor addressed as ``DELETE /vendors?id=<id>``."""
    vendor_id = request.args.get('id', type=int)
    if vendor_id is None:
        raise ValidationError('Vendor id is required')
    return jsonify(vendor_service.delete_vendor(get_session(), vendor_id))
