"""Product model."""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hardware_shop.database import Base
from hardware_shop.utils.number_format import to_number


class Product(Base):
    """Product with its current stock level."""

    __tablename__ = 'products'
    __table_args__ = (
        CheckConstraint('cost_price >= 0', name='ck_products_cost_price_non_negative'),
        CheckConstraint('selling_price > cost_price', name='ck_products_selling_above_cost'),
        CheckConstraint('stock_quantity >= 0', name='ck_products_stock_non_negative'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    vendor_id = Column(Integer, ForeignKey('vendors.id'), nullable=False, index=True)
    cost_price = Column(Numeric(10, 2), nullable=False)
    selling_price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0, server_default='0')
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    vendor = relationship('Vendor', back_populates='products')
    sales = relationship('Sale', back_populates='product')

    def to_dict(self, vendor_name=None):
        """Serialize for JSON responses."""
        if vendor_name is None and self.vendor is not None:
            vendor_name = self.vendor.name
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'vendor_id': self.vendor_id,
            'vendor_name': vendor_name,
            'cost_price': to_number(self.cost_price),
            'selling_price': to_number(self.selling_price),
            'stock_quantity': self.stock_quantity,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock_quantity})>"
