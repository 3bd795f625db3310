"""Sale model."""
from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hardware_shop.database import Base
from hardware_shop.utils.number_format import to_number


class Sale(Base):
    """
    Sale of a single product.

    ``total`` and ``profit`` are fixed when the sale is recorded and are never
    recomputed from the product's current prices.
    """

    __tablename__ = 'sales'
    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_sales_quantity_positive'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey('products.id'), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    profit = Column(Numeric(10, 2), nullable=False)
    sale_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)

    # Relationships
    product = relationship('Product', back_populates='sales')

    def to_dict(self, product_name=None):
        if product_name is None and self.product is not None:
            product_name = self.product.name
        return {
            'id': self.id,
            'product_id': self.product_id,
            'product_name': product_name,
            'quantity': self.quantity,
            'total': to_number(self.total),
            'profit': to_number(self.profit),
            'sale_date': self.sale_date.isoformat() if self.sale_date else None,
        }

    def __repr__(self):
        return f"<Sale(id={self.id}, product_id={self.product_id}, quantity={self.quantity}, total={self.total})>"
