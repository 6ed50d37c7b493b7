"""
Order placement: all-or-nothing stock reservation with price snapshots
"""
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from pharma import db
from pharma.business.errors import (
    InsufficientStock,
    InvalidOrderInput,
    MedicineNotFound,
    PersistenceFailure,
)
from pharma.business.ordering import OrderLineRequest, OrderPlacementManager, normalize_order_items
from pharma.data.order import Order, OrderItem


def _stock(medicine):
    db.session.refresh(medicine)
    return medicine.stock


def test_successful_order_decrements_stock_and_snapshots_price(make_medicine):
    medicine = make_medicine(stock=10, price='12.50')

    order = OrderPlacementManager().place_order([OrderLineRequest(medicine.id, 3)])

    assert _stock(medicine) == 7
    assert len(order.items) == 1
    item = order.items[0]
    assert item.medicine_id == medicine.id
    assert item.quantity == 3
    assert item.price_at_purchase == Decimal('12.50')
    assert order.total == Decimal('37.50')


def test_insufficient_stock_changes_nothing(make_medicine):
    medicine = make_medicine(stock=2)

    with pytest.raises(InsufficientStock) as excinfo:
        OrderPlacementManager().place_order([OrderLineRequest(medicine.id, 5)])

    error = excinfo.value
    assert error.kind == 'insufficient_stock'
    assert error.requested == 5
    assert error.available == 2
    assert error.shortfall == 3
    assert medicine.name in str(error)
    assert _stock(medicine) == 2
    assert Order.query.count() == 0


def test_unknown_medicine_is_rejected(make_medicine):
    make_medicine()

    with pytest.raises(MedicineNotFound) as excinfo:
        OrderPlacementManager().place_order([OrderLineRequest(9999, 1)])

    assert excinfo.value.medicine_id == 9999
    assert excinfo.value.http_status == 404
    assert Order.query.count() == 0


def test_unknown_medicine_after_valid_line_rolls_back(make_medicine):
    medicine = make_medicine(stock=5)

    with pytest.raises(MedicineNotFound):
        OrderPlacementManager().place_order([
            OrderLineRequest(medicine.id, 2),
            OrderLineRequest(9999, 1),
        ])

    assert _stock(medicine) == 5
    assert Order.query.count() == 0
    assert OrderItem.query.count() == 0


def test_oversized_medicine_id_is_skipped(make_medicine):
    medicine = make_medicine(stock=5)
    lines = normalize_order_items([
        {'medicine_id': medicine.id, 'quantity': 2},
        {'medicine_id': str(10 ** 30), 'quantity': 1},
    ])

    order = OrderPlacementManager().place_order(lines)

    assert [item.medicine_id for item in order.items] == [medicine.id]
    assert _stock(medicine) == 3


def test_failure_on_later_line_rolls_back_earlier_lines(make_medicine):
    plenty = make_medicine(name='Aspirin 100mg', stock=50)
    scarce = make_medicine(name='Insulin 10ml', stock=1)

    with pytest.raises(InsufficientStock):
        OrderPlacementManager().place_order([
            OrderLineRequest(plenty.id, 10),
            OrderLineRequest(scarce.id, 2),
        ])

    assert _stock(plenty) == 50
    assert _stock(scarce) == 1
    assert Order.query.count() == 0
    assert OrderItem.query.count() == 0


def test_stock_is_conserved_across_orders(make_medicine):
    medicine = make_medicine(stock=30)
    manager = OrderPlacementManager()

    manager.place_order([OrderLineRequest(medicine.id, 4)])
    manager.place_order([OrderLineRequest(medicine.id, 6)])
    with pytest.raises(InsufficientStock):
        manager.place_order([OrderLineRequest(medicine.id, 25)])

    ordered = db.session.query(db.func.sum(OrderItem.quantity)).scalar()
    assert ordered == 10
    assert _stock(medicine) + ordered == 30


def test_price_snapshot_survives_price_change(make_medicine):
    medicine = make_medicine(stock=10, price='3.20')
    order = OrderPlacementManager().place_order([OrderLineRequest(medicine.id, 2)])
    order_id = order.id

    medicine.price = Decimal('9.99')
    db.session.commit()

    stored = db.session.get(Order, order_id)
    assert stored.items[0].price_at_purchase == Decimal('3.20')
    assert stored.total == Decimal('6.40')


def test_non_actionable_lines_are_skipped(make_medicine):
    medicine = make_medicine(stock=10)
    lines = normalize_order_items([
        {'medicine_id': medicine.id, 'quantity': '3'},
        {'medicine_id': medicine.id, 'quantity': 0},
        {'medicine_id': '', 'quantity': 5},
        {'medicineId': medicine.id, 'quantity': 'lots'},
    ])

    order = OrderPlacementManager().place_order(lines)

    assert [item.quantity for item in order.items] == [3]
    assert _stock(medicine) == 7


def test_same_medicine_on_two_lines_draws_down_twice(make_medicine):
    medicine = make_medicine(stock=10)

    order = OrderPlacementManager().place_order([
        OrderLineRequest(medicine.id, 4),
        OrderLineRequest(medicine.id, 4),
    ])

    assert len(order.items) == 2
    assert _stock(medicine) == 2


def test_same_medicine_on_two_lines_cannot_oversell(make_medicine):
    medicine = make_medicine(stock=10)

    with pytest.raises(InsufficientStock) as excinfo:
        OrderPlacementManager().place_order([
            OrderLineRequest(medicine.id, 6),
            OrderLineRequest(medicine.id, 6),
        ])

    assert excinfo.value.available == 4
    assert _stock(medicine) == 10


def test_no_actionable_line_opens_no_transaction(make_medicine):
    medicine = make_medicine(stock=10)

    with pytest.raises(InvalidOrderInput):
        OrderPlacementManager().place_order([OrderLineRequest(medicine.id, 0)])

    assert Order.query.count() == 0


class FailingCommitSession:
    """Delegates to the real session but fails at commit time"""

    def __init__(self, session):
        self._session = session

    def __getattr__(self, name):
        return getattr(self._session, name)

    def commit(self):
        raise OperationalError('COMMIT', {}, Exception('disk I/O error'))


def test_database_error_becomes_persistence_failure(make_medicine):
    medicine = make_medicine(stock=10)
    manager = OrderPlacementManager(session=FailingCommitSession(db.session))

    with pytest.raises(PersistenceFailure) as excinfo:
        manager.place_order([OrderLineRequest(medicine.id, 3)])

    assert excinfo.value.http_status == 500
    assert 'disk I/O error' in str(excinfo.value)
    assert _stock(medicine) == 10
    assert Order.query.count() == 0
