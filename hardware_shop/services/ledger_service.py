"""
Inventory ledger service with transactional logic.
Handles products, sale recording and sale reversal while keeping
product stock consistent with the sales that reference it.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import update, desc

from hardware_shop.models import Product, Sale, Vendor
from hardware_shop.exceptions import (
    ShopError, ValidationError, NotFoundError, ConflictError, InsufficientStockError
)
from hardware_shop.utils.number_format import (
    round2, parse_decimal, parse_int, parse_stock_quantity,
    fits_integer, fits_money, OutOfRangeError
)

logger = logging.getLogger(__name__)


# =====================================================
# PRODUCTS
# =====================================================

def list_products(session) -> List[Dict[str, Any]]:
    """List all products with their vendor name, ordered by name."""
    rows = (
        session.query(Product, Vendor.name.label('vendor_name'))
        .outerjoin(Vendor, Vendor.id == Product.vendor_id)
        .order_by(Product.name.asc(), Product.id.asc())
        .all()
    )
    return [product.to_dict(vendor_name=vendor_name) for product, vendor_name in rows]


def get_product(session, product_id: int) -> Product:
    """Get a product or raise NotFoundError."""
    if not fits_integer(product_id):
        raise NotFoundError('Product not found')
    product = session.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError('Product not found')
    return product


def validate_product_fields(session, fields: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Validate and normalize product fields.

    Checks run in a fixed order and the first failure is raised:
    name, category, vendor_id present, vendor exists, cost_price,
    selling_price, stock_quantity.

    Returns:
        dict with name, category, vendor_id, cost_price, selling_price, stock_quantity

    Raises:
        ValidationError
    """
    fields = fields or {}

    name = fields.get('name')
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('Product name is required')

    category = fields.get('category')
    if not isinstance(category, str) or not category.strip():
        raise ValidationError('Category is required')

    raw_vendor_id = fields.get('vendor_id')
    if raw_vendor_id in (None, '', 0, '0'):
        raise ValidationError('Vendor is required')
    try:
        vendor_id = parse_int(raw_vendor_id)
    except ValueError:
        raise ValidationError('Vendor not found')

    vendor_exists = session.query(Vendor.id).filter(Vendor.id == vendor_id).first()
    if not vendor_exists:
        raise ValidationError('Vendor not found')

    try:
        cost_price = parse_decimal(fields.get('cost_price'))
    except ValueError:
        raise ValidationError('Cost price must be a non-negative number')
    if cost_price < 0:
        raise ValidationError('Cost price must be a non-negative number')
    if not fits_money(cost_price):
        raise ValidationError('Cost price is too large')
    cost_price = round2(cost_price)

    # selling > cost holds on the stored cents
    try:
        selling_price = parse_decimal(fields.get('selling_price'))
    except ValueError:
        raise ValidationError('Selling price must be greater than cost price')
    if not fits_money(selling_price):
        raise ValidationError('Selling price is too large')
    selling_price = round2(selling_price)
    if selling_price <= cost_price:
        raise ValidationError('Selling price must be greater than cost price')

    try:
        stock_quantity = parse_stock_quantity(fields.get('stock_quantity'))
    except OutOfRangeError:
        raise ValidationError('Stock quantity is too large')
    if stock_quantity < 0:
        raise ValidationError('Stock quantity cannot be negative')

    return {
        'name': name.strip(),
        'category': category.strip(),
        'vendor_id': vendor_id,
        'cost_price': cost_price,
        'selling_price': selling_price,
        'stock_quantity': stock_quantity,
    }


def create_product(session, fields: Dict[str, Any]) -> Product:
    """Validate fields and create a product."""
    try:
        data = validate_product_fields(session, fields)
        product = Product(**data)
        session.add(product)
        session.commit()
        logger.info(f"Product created: id={product.id} name='{product.name}' stock={product.stock_quantity}")
        return product
    except Exception:
        session.rollback()
        raise


def update_product(session, product_id: int, fields: Dict[str, Any]) -> Product:
    """
    Replace a product's fields after validating them.

    Existing sales keep their recorded total/profit; only future sales use
    the new prices.
    """
    try:
        product = get_product(session, product_id)
        data = validate_product_fields(session, fields)

        for key, value in data.items():
            setattr(product, key, value)

        session.commit()
        logger.info(f"Product updated: id={product.id} stock={product.stock_quantity}")
        return product
    except Exception:
        session.rollback()
        raise


def delete_product(session, product_id: int) -> Dict[str, Any]:
    """Delete a product that no sale references."""
    try:
        product = get_product(session, product_id)

        has_sales = session.query(Sale.id).filter(Sale.product_id == product_id).first()
        if has_sales:
            raise ConflictError('Cannot delete product with existing sales records')

        product_name = product.name
        session.delete(product)
        session.commit()
        logger.info(f"Product deleted: id={product_id} name='{product_name}'")

        return {'message': 'Product deleted successfully', 'id': product_id}
    except Exception:
        session.rollback()
        raise


# =====================================================
# SALES
# =====================================================

def list_sales(session, limit: int = 100) -> List[Dict[str, Any]]:
    """List the most recent sales with their product name."""
    rows = (
        session.query(Sale, Product.name.label('product_name'))
        .outerjoin(Product, Product.id == Sale.product_id)
        .order_by(desc(Sale.sale_date), desc(Sale.id))
        .limit(limit)
        .all()
    )
    return [sale.to_dict(product_name=product_name) for sale, product_name in rows]


def record_sale(session, product_id, quantity) -> Sale:
    """
    Record a sale and decrement stock in a single transaction.

    Steps:
    1. Validate product_id and quantity
    2. Lock the product row and read prices/stock
    3. Reject if stock is insufficient
    4. Compute total and profit snapshots
    5. Conditionally decrement stock (guarded by stock_quantity >= quantity)
    6. Insert the sale and commit

    Raises:
        ValidationError, NotFoundError, InsufficientStockError
    """
    if product_id in (None, ''):
        raise ValidationError('Product is required')
    try:
        product_id = parse_int(product_id)
    except OutOfRangeError:
        raise NotFoundError('Product not found')
    except ValueError:
        raise ValidationError('Product is required')

    try:
        qty = parse_int(quantity)
    except OutOfRangeError:
        raise ValidationError('Quantity is too large')
    except ValueError:
        raise ValidationError('Quantity must be a positive number')
    if qty <= 0:
        raise ValidationError('Quantity must be a positive number')

    try:
        product = (
            session.query(Product)
            .filter(Product.id == product_id)
            .with_for_update()
            .first()
        )
        if not product:
            raise NotFoundError('Product not found')

        if product.stock_quantity < qty:
            raise InsufficientStockError(available=product.stock_quantity, requested=qty)

        selling_price = Decimal(product.selling_price)
        cost_price = Decimal(product.cost_price)
        total = round2(selling_price * qty)
        profit = round2((selling_price - cost_price) * qty)

        result = session.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock_quantity >= qty)
            .values(stock_quantity=Product.stock_quantity - qty)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            session.rollback()
            available = session.query(Product.stock_quantity).filter(Product.id == product_id).scalar() or 0
            raise InsufficientStockError(available=available, requested=qty)

        sale = Sale(product_id=product_id, quantity=qty, total=total, profit=profit)
        session.add(sale)
        session.commit()

        logger.info(f"Sale recorded: id={sale.id} product_id={product_id} qty={qty} total={total} profit={profit}")
        return sale

    except InsufficientStockError as e:
        session.rollback()
        logger.warning(f"Sale rejected for product_id={product_id}: {e.message}")
        raise
    except ShopError:
        session.rollback()
        raise
    except Exception:
        session.rollback()
        logger.error(f"Error recording sale for product_id={product_id}", exc_info=True)
        raise


def delete_sale(session, sale_id: int) -> Dict[str, Any]:
    """
    Delete a sale and restore exactly the quantity it removed from stock.

    The restored amount is the sale's recorded quantity, not a recomputation,
    so stock can exceed physical inventory if it was edited manually since.

    Returns:
        dict with message, sale_id, product_id and restored_quantity
    """
    if not fits_integer(sale_id):
        raise NotFoundError('Sale not found')

    try:
        sale = (
            session.query(Sale)
            .filter(Sale.id == sale_id)
            .with_for_update()
            .first()
        )
        if not sale:
            raise NotFoundError('Sale not found')

        product_id = sale.product_id
        restored_quantity = sale.quantity

        session.delete(sale)
        session.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock_quantity=Product.stock_quantity + restored_quantity)
            .execution_options(synchronize_session=False)
        )
        session.commit()

        logger.info(f"Sale deleted: id={sale_id} product_id={product_id} restored={restored_quantity}")

        return {
            'message': 'Sale deleted and stock restored',
            'sale_id': sale_id,
            'product_id': product_id,
            'restored_quantity': restored_quantity,
        }

    except ShopError:
        session.rollback()
        raise
    except Exception:
        session.rollback()
        logger.error(f"Error deleting sale id={sale_id}", exc_info=True)
        raise
