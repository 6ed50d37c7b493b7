from decimal import Decimal

from sqlalchemy import event

from pharma import db
from pharma.data.base import TimestampedBase

# A medicine is flagged low on stock at or below this many units
LOW_STOCK_THRESHOLD = 20


def is_low_stock(stock, threshold=LOW_STOCK_THRESHOLD) -> bool:
    return (stock or 0) <= threshold


class Medicine(TimestampedBase):
    __table_args__ = (
        db.Index('idx_medicine_name', 'name'),
        db.Index('idx_medicine_expiry', 'expiry_date'),
        db.Index('idx_medicine_supplier', 'supplier_id'),
    )

    name = db.Column(db.String(255), nullable=False)
    supplier_id = db.Column(db.Integer, db.ForeignKey('suppliers.id'), nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal('0.00'))
    stock = db.Column(db.Integer, nullable=False, default=0)
    expiry_date = db.Column(db.Date, nullable=True)
    low_stock_flag = db.Column(db.Boolean, nullable=False, default=True)

    supplier = db.relationship('Supplier', back_populates='medicines')
    order_items = db.relationship('OrderItem', back_populates='medicine')

    def refresh_low_stock_flag(self):
        self.low_stock_flag = is_low_stock(self.stock)
        return self.low_stock_flag

    def __repr__(self):
        return f'<Medicine {self.name} stock={self.stock}>'


@event.listens_for(Medicine, 'before_insert')
@event.listens_for(Medicine, 'before_update')
def _sync_low_stock_flag(mapper, connection, target):
    target.refresh_low_stock_flag()
