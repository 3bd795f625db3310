"""Vendor service: listing, creation and guarded deletion."""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from hardware_shop.models import Vendor, Product
from hardware_shop.exceptions import ValidationError, NotFoundError, ConflictError
from hardware_shop.utils.number_format import fits_integer

logger = logging.getLogger(__name__)


def list_vendors(session) -> List[Dict[str, Any]]:
    """List all vendors ordered by name."""
    vendors = session.query(Vendor).order_by(Vendor.name.asc()).all()
    return [vendor.to_dict() for vendor in vendors]


def create_vendor(session, name: Optional[str], phone: Optional[str] = None) -> Vendor:
    """
    Create a vendor with a unique, trimmed name.

    Raises:
        ValidationError: if the name is empty
        ConflictError: if another vendor already uses the name
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('Vendor name is required')

    name = name.strip()
    if phone is not None:
        phone = str(phone).strip() or None

    existing = session.query(Vendor.id).filter(Vendor.name == name).first()
    if existing:
        raise ConflictError('Vendor name already exists')

    try:
        vendor = Vendor(name=name, phone=phone)
        session.add(vendor)
        session.commit()
        logger.info(f"Vendor created: id={vendor.id} name='{vendor.name}'")
        return vendor

    except IntegrityError as e:
        # Concurrent insert of the same name
        session.rollback()
        error_msg = str(e.orig).lower()
        if 'unique' in error_msg or 'duplicate' in error_msg:
            raise ConflictError('Vendor name already exists')
        raise
    except Exception:
        session.rollback()
        raise


def delete_vendor(session, vendor_id: int) -> Dict[str, Any]:
    """Delete a vendor that no product references."""
    if not fits_integer(vendor_id):
        raise NotFoundError('Vendor not found')

    try:
        vendor = session.query(Vendor).filter(Vendor.id == vendor_id).first()
        if not vendor:
            raise NotFoundError('Vendor not found')

        has_products = session.query(Product.id).filter(Product.vendor_id == vendor_id).first()
        if has_products:
            raise ConflictError('Cannot delete vendor with existing products')

        vendor_name = vendor.name
        session.delete(vendor)
        session.commit()
        logger.info(f"Vendor deleted: id={vendor_id} name='{vendor_name}'")

        return {'message': 'Vendor deleted successfully', 'id': vendor_id}
    except Exception:
        session.rollback()
        raise
