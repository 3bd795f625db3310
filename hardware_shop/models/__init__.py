"""Models package - exports all SQLAlchemy models."""
from hardware_shop.models.app_user import AppUser, UserRole
from hardware_shop.models.vendor import Vendor
from hardware_shop.models.product import Product
from hardware_shop.models.sale import Sale

__all__ = [
    'AppUser', 'UserRole',
    'Vendor', 'Product', 'Sale',
]
