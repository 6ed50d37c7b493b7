from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from pharma import db
from pharma.business.errors import (
    InsufficientStock,
    InvalidOrderInput,
    MedicineNotFound,
    OrderPlacementError,
    PersistenceFailure,
)
from pharma.business.ordering.order_items import OrderLineRequest
from pharma.business.ordering.transaction import transaction_scope
from pharma.data.medicine import Medicine
from pharma.data.order import Order, OrderItem
from pharma.logger import get_logger

logger = get_logger("pharma.business.ordering.placement")


class OrderPlacementManager:
    """
    Turns a list of requested lines into one committed Order.

    All writes (order row, stock decrements, order items) happen in a single
    transaction: either every actionable line is fulfilled or nothing changes.
    Stock is always read with a locking read inside that transaction, so two
    placements against the same medicine cannot both see the pre-decrement
    value.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def place_order(self, lines: Iterable[OrderLineRequest]) -> Order:
        """
        Place an order.

        Args:
            lines: Normalized lines (see normalize_order_items). Lines that are
                not actionable are skipped.

        Returns:
            The committed Order

        Raises:
            InvalidOrderInput: no actionable line; no transaction is opened
            MedicineNotFound: a line references an unknown medicine
            InsufficientStock: a line asks for more than is in stock
            PersistenceFailure: the database raised
        """
        lines = list(lines)
        if not any(line.is_actionable for line in lines):
            raise InvalidOrderInput("Order needs at least one medicine with a positive quantity")

        try:
            with transaction_scope(self.session) as session:
                order = Order()
                session.add(order)
                session.flush()

                reserved = 0
                for line in lines:
                    if not line.is_actionable:
                        logger.debug(f"Skipping order line {line}")
                        continue
                    self._reserve_line(session, order, line)
                    reserved += 1
                order_id = order.id
        except OrderPlacementError as e:
            logger.warning(f"Order placement failed: {e}")
            raise
        except SQLAlchemyError as e:
            logger.error(f"Order placement failed in the database: {e}")
            raise PersistenceFailure(str(e)) from e

        logger.info(f"Order {order_id} placed with {reserved} item(s)")
        return order

    def _reserve_line(self, session, order: Order, line: OrderLineRequest) -> OrderItem:
        medicine = self._lock_medicine(session, line.medicine_id)
        if medicine is None:
            raise MedicineNotFound(line.medicine_id)

        if medicine.stock < line.quantity:
            raise InsufficientStock(medicine.name, line.quantity, medicine.stock)

        medicine.stock = medicine.stock - line.quantity
        item = OrderItem(
            order=order,
            medicine=medicine,
            quantity=line.quantity,
            price_at_purchase=medicine.price,
        )
        session.add(item)
        session.flush()
        return item

    @staticmethod
    def _lock_medicine(session, medicine_id: int) -> Optional[Medicine]:
        # populate_existing: never trust a stock value already in the identity map
        stmt = (
            select(Medicine)
            .where(Medicine.id == medicine_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return session.execute(stmt).scalar_one_or_none()
