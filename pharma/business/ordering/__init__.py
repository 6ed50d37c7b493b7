from pharma.business.ordering.order_items import (
    OrderLineRequest,
    items_from_form,
    normalize_order_items,
)
from pharma.business.ordering.order_placement_manager import OrderPlacementManager
from pharma.business.ordering.transaction import transaction_scope

__all__ = [
    'OrderLineRequest',
    'OrderPlacementManager',
    'items_from_form',
    'normalize_order_items',
    'transaction_scope',
]
