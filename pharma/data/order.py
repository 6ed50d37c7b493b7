from decimal import Decimal

from pharma import db
from pharma.data.base import TimestampedBase

ORDER_STATUS_PENDING = 'pending'
ORDER_STATUS_COMPLETED = 'completed'


class Order(TimestampedBase):
    __table_args__ = (
        db.Index('idx_order_status', 'status'),
    )

    status = db.Column(db.String(32), nullable=False, default=ORDER_STATUS_PENDING)

    items = db.relationship(
        'OrderItem',
        back_populates='order',
        cascade='all, delete-orphan',
        order_by='OrderItem.id',
    )

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal('0.00'))

    def __repr__(self):
        return f'<Order {self.id} {self.status}>'


class OrderItem(TimestampedBase):
    __tablename__ = 'order_items'

    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False, index=True)
    medicine_id = db.Column(db.Integer, db.ForeignKey('medicines.id'), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    # Snapshot of Medicine.price when the order was placed
    price_at_purchase = db.Column(db.Numeric(10, 2), nullable=False)

    order = db.relationship('Order', back_populates='items')
    medicine = db.relationship('Medicine', back_populates='order_items')

    @property
    def line_total(self) -> Decimal:
        return Decimal(self.price_at_purchase or 0) * self.quantity

    def __repr__(self):
        return f'<OrderItem order={self.order_id} medicine={self.medicine_id} qty={self.quantity}>'
