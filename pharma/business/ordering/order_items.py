"""
Order line normalization

Requests may carry one item or a list of items, as JSON or as the HTML order
form. Everything is mapped to a list of OrderLineRequest before the placement
workflow sees it.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pharma.business.errors import InvalidOrderInput
from pharma.data.base import MAX_DB_INTEGER

MEDICINE_ID_KEYS = ('medicine_id', 'medicineId')


@dataclass(frozen=True)
class OrderLineRequest:
    medicine_id: int
    quantity: int

    @property
    def is_actionable(self) -> bool:
        """Lines with no medicine or a non-positive quantity are skipped, not rejected."""
        return bool(self.medicine_id) and self.quantity > 0


def coerce_int(value: Any) -> int:
    """
    Lenient integer parsing: anything unparseable, non-finite or outside the
    database integer range becomes 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, float):
        value = int(value) if math.isfinite(value) else 0
    elif not isinstance(value, int):
        value = _parse_int_text(str(value).strip())
    return value if -MAX_DB_INTEGER <= value <= MAX_DB_INTEGER else 0


def _parse_int_text(text: str) -> int:
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return 0
    return int(number) if math.isfinite(number) else 0


def _line_from_mapping(item: Mapping) -> OrderLineRequest:
    medicine_id = None
    for key in MEDICINE_ID_KEYS:
        if key in item:
            medicine_id = item[key]
            break
    return OrderLineRequest(
        medicine_id=coerce_int(medicine_id),
        quantity=coerce_int(item.get('quantity')),
    )


def normalize_order_items(payload: Any) -> list[OrderLineRequest]:
    """
    Map a single item or a list of items to a list of OrderLineRequest.

    Raises:
        InvalidOrderInput: payload missing, of the wrong shape, empty, or
            without a single actionable line
    """
    if payload is None or payload == '':
        raise InvalidOrderInput("No order items supplied")

    if isinstance(payload, Mapping):
        raw_items = [payload]
    elif isinstance(payload, (list, tuple)):
        raw_items = list(payload)
    else:
        raise InvalidOrderInput(f"Order items must be an object or a list, got {type(payload).__name__}")

    if not raw_items:
        raise InvalidOrderInput("No order items supplied")

    lines = []
    for position, item in enumerate(raw_items, start=1):
        if not isinstance(item, Mapping):
            raise InvalidOrderInput(f"Order item {position} is not an object")
        lines.append(_line_from_mapping(item))

    if not any(line.is_actionable for line in lines):
        raise InvalidOrderInput("Order needs at least one medicine with a positive quantity")

    return lines


def items_from_form(form) -> list[dict]:
    """Pair up the repeated medicine_id/quantity fields of the order form."""
    medicine_ids = form.getlist('medicine_id')
    quantities = form.getlist('quantity')
    return [
        {'medicine_id': medicine_id, 'quantity': quantity}
        for medicine_id, quantity in zip(medicine_ids, quantities)
    ]
