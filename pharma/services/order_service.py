"""
Order Service
Read-side helpers for the order screens and the JSON API.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import joinedload, selectinload

from pharma import db
from pharma.data.order import Order, OrderItem


class OrderService:

    @staticmethod
    def list_orders(limit: Optional[int] = None) -> List[Order]:
        """Orders newest first, with items and their medicines loaded."""
        query = Order.query.options(
            selectinload(Order.items).joinedload(OrderItem.medicine)
        ).order_by(Order.created_at.desc(), Order.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_order(order_id: int) -> Optional[Order]:
        return db.session.get(
            Order,
            order_id,
            options=[selectinload(Order.items).joinedload(OrderItem.medicine)],
        )

    @staticmethod
    def order_summary(order: Order) -> Dict[str, Any]:
        """
        JSON-ready view of an order and its lines.

        Prices come from the price_at_purchase snapshot, never the current
        medicine price.
        """
        summary = order.to_dict(exclude={'updated_at'})
        summary['items'] = [
            {
                'id': item.id,
                'medicine_id': item.medicine_id,
                'medicine_name': item.medicine.name if item.medicine else None,
                'quantity': item.quantity,
                'price_at_purchase': str(item.price_at_purchase),
                'line_total': str(item.line_total),
            }
            for item in order.items
        ]
        summary['total'] = str(order.total)
        return summary
