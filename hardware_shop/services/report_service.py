"""
Report service.
Read-only profit and revenue rollups over sales, products and vendors.
"""
from decimal import Decimal
from sqlalchemy import func, desc

from hardware_shop.models import Product, Sale, Vendor
from hardware_shop.exceptions import ValidationError
from hardware_shop.utils.number_format import to_number

REPORT_TYPES = ('summary', 'product-profit', 'vendor-profit', 'daily-sales')


def _money(value) -> float:
    """Coalesce a SQL sum to a float, treating NULL as zero."""
    if value is None:
        return 0.0
    return to_number(Decimal(str(value)))


def _count(value) -> int:
    return int(value or 0)


def _sale_aggregates():
    """Aggregate columns shared by every grouped report."""
    return (
        func.count(Sale.id).label('total_sales'),
        func.coalesce(func.sum(Sale.quantity), 0).label('total_quantity'),
        func.coalesce(func.sum(Sale.total), 0).label('total_revenue'),
        func.coalesce(func.sum(Sale.profit), 0).label('total_profit'),
    )


def get_summary(session) -> dict:
    """Totals across all sales ever recorded."""
    row = session.query(
        func.count(Sale.id).label('total_sales'),
        func.coalesce(func.sum(Sale.quantity), 0).label('total_quantity'),
        func.coalesce(func.sum(Sale.total), 0).label('total_sales_amount'),
        func.coalesce(func.sum(Sale.profit), 0).label('total_profit'),
    ).one()

    return {
        'total_sales': _count(row.total_sales),
        'total_quantity': _count(row.total_quantity),
        'total_sales_amount': _money(row.total_sales_amount),
        'total_profit': _money(row.total_profit),
    }


def get_product_profit(session) -> list:
    """
    Per-product sales rollup, most profitable first.

    Products without sales are included with zero aggregates.
    """
    rows = (
        session.query(
            Product.id.label('id'),
            Product.name.label('name'),
            *_sale_aggregates(),
            Product.stock_quantity.label('current_stock')
        )
        .outerjoin(Sale, Sale.product_id == Product.id)
        .group_by(Product.id, Product.name, Product.stock_quantity)
        .order_by(desc('total_profit'), Product.id.asc())
        .all()
    )

    return [
        {
            'id': row.id,
            'name': row.name,
            'total_sales': _count(row.total_sales),
            'total_quantity': _count(row.total_quantity),
            'total_revenue': _money(row.total_revenue),
            'total_profit': _money(row.total_profit),
            'current_stock': _count(row.current_stock),
        }
        for row in rows
    ]


def get_vendor_profit(session) -> list:
    """Per-vendor sales rollup plus distinct product count, most profitable first."""
    rows = (
        session.query(
            Vendor.id.label('id'),
            Vendor.name.label('name'),
            *_sale_aggregates(),
            func.count(func.distinct(Product.id)).label('product_count')
        )
        .outerjoin(Product, Product.vendor_id == Vendor.id)
        .outerjoin(Sale, Sale.product_id == Product.id)
        .group_by(Vendor.id, Vendor.name)
        .order_by(desc('total_profit'), Vendor.id.asc())
        .all()
    )

    return [
        {
            'id': row.id,
            'name': row.name,
            'total_sales': _count(row.total_sales),
            'total_quantity': _count(row.total_quantity),
            'total_revenue': _money(row.total_revenue),
            'total_profit': _money(row.total_profit),
            'product_count': _count(row.product_count),
        }
        for row in rows
    ]


def get_daily_sales(session, days: int = 30) -> list:
    """Per-day rollup for the most recent days with sales, newest first."""
    sale_day = func.date(Sale.sale_date)
    rows = (
        session.query(sale_day.label('sale_day'), *_sale_aggregates())
        .group_by(sale_day)
        .order_by(sale_day.desc())
        .limit(days)
        .all()
    )

    return [
        {
            # SQLite returns the day as text, PostgreSQL as a date
            'date': row.sale_day.isoformat() if hasattr(row.sale_day, 'isoformat') else str(row.sale_day),
            'total_sales': _count(row.total_sales),
            'total_quantity': _count(row.total_quantity),
            'total_revenue': _money(row.total_revenue),
            'total_profit': _money(row.total_profit),
        }
        for row in rows
    ]


def get_report(session, report_type=None, days: int = 30):
    """Dispatch a report by its type name; defaults to the summary."""
    report_type = report_type or 'summary'

    if report_type == 'summary':
        return get_summary(session)
    if report_type == 'product-profit':
        return get_product_profit(session)
    if report_type == 'vendor-profit':
        return get_vendor_profit(session)
    if report_type == 'daily-sales':
        return get_daily_sales(session, days=days)

    raise ValidationError('Invalid report type', payload={'valid_types': list(REPORT_TYPES)})
