"""
JSON order API

POST /api/orders   place an order
GET  /api/orders/<id>   order summary
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required

from pharma.business.errors import InvalidOrderInput, OrderPlacementError
from pharma.business.ordering import OrderPlacementManager, normalize_order_items
from pharma.logger import get_logger
from pharma.services.order_service import OrderService
from pharma.utils.logging_sanitizer import sanitize_dict

bp = Blueprint('api', __name__)
logger = get_logger("pharma.routes.api")


def _error_response(error: OrderPlacementError):
    return jsonify({'success': False, 'error': error.to_dict()}), error.http_status


def _items_from_json(payload):
    """Accept {"items": ...}, a bare list, or a single item object."""
    if isinstance(payload, dict) and 'items' in payload:
        return payload['items']
    return payload


@bp.route('/orders', methods=['POST'])
@login_required
def place_order():
    payload = request.get_json(silent=True)
    if payload is None:
        return _error_response(InvalidOrderInput("Request body must be JSON"))

    logger.debug(f"API order request: {sanitize_dict(payload) if isinstance(payload, dict) else payload}")

    try:
        lines = normalize_order_items(_items_from_json(payload))
        order = OrderPlacementManager().place_order(lines)
    except OrderPlacementError as e:
        return _error_response(e)

    return jsonify({'success': True, 'order_id': order.id}), 201


@bp.route('/orders/<int:order_id>')
@login_required
def get_order(order_id):
    order = OrderService.get_order(order_id)
    if order is None:
        return jsonify({'success': False, 'error': {'kind': 'not_found', 'message': f'Order not found: {order_id}'}}), 404
    return jsonify({'success': True, 'order': OrderService.order_summary(order)})
