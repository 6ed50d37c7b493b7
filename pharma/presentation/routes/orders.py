"""
Order routes
Checkout form and order history. Placement itself lives in OrderPlacementManager.
"""

from flask import Blueprint, render_template, redirect, url_for, flash, request, abort
from flask_login import login_required, current_user

from pharma.business.errors import OrderPlacementError
from pharma.business.ordering import OrderPlacementManager, items_from_form, normalize_order_items
from pharma.logger import get_logger
from pharma.services.medicine_search_service import MedicineSearchService
from pharma.services.order_service import OrderService
from pharma.utils.logging_sanitizer import sanitize_form_data

bp = Blueprint('orders', __name__)
logger = get_logger("pharma.routes.orders")

# Blank rows offered on the checkout form
ORDER_FORM_ROWS = 5


@bp.route('/orders')
@login_required
def list():
    return render_template('orders/list.html', orders=OrderService.list_orders())


@bp.route('/orders/new')
@login_required
def new():
    return render_template('orders/new.html',
                           medicines=MedicineSearchService.orderable(),
                           rows=ORDER_FORM_ROWS)


@bp.route('/orders', methods=['POST'])
@login_required
def create():
    logger.debug(f"Order form from {current_user.username}: {sanitize_form_data(request.form)}")
    try:
        lines = normalize_order_items(items_from_form(request.form))
        order = OrderPlacementManager().place_order(lines)
    except OrderPlacementError as e:
        return render_template('orders/new.html',
                               medicines=MedicineSearchService.orderable(),
                               rows=ORDER_FORM_ROWS,
                               error=f"Order failed: {e}. No stock was changed."), e.http_status

    flash(f'Order #{order.id} placed', 'success')
    return redirect(url_for('orders.list'))


@bp.route('/orders/<int:order_id>')
@login_required
def detail(order_id):
    order = OrderService.get_order(order_id)
    if order is None:
        abort(404)
    return render_template('orders/detail.html', order=order)
