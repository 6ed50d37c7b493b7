"""
Medicine routes
List/filter, create, edit (restock) and the expiry and low-stock views
"""

from datetime import date

from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_required, current_user

from pharma import db, get_config
from pharma.business.errors import MedicineValidationError
from pharma.business.inventory.medicine_manager import MedicineFormData, MedicineManager
from pharma.data.medicine import LOW_STOCK_THRESHOLD, Medicine
from pharma.data.supplier import Supplier
from pharma.logger import get_logger
from pharma.services.medicine_search_service import MedicineFilters, MedicineSearchService

bp = Blueprint('medicines', __name__)
logger = get_logger("pharma.routes.medicines")


def _suppliers():
    return Supplier.query.order_by(Supplier.name.asc()).all()


@bp.route('/medicines')
@login_required
def list():
    """List medicines with optional filters"""
    filters = MedicineFilters.from_args(request.args)
    medicines = MedicineSearchService.search(filters)
    return render_template('medicines/list.html',
                           medicines=medicines,
                           suppliers=_suppliers(),
                           filters=filters.as_form_values(),
                           threshold=LOW_STOCK_THRESHOLD)


@bp.route('/medicines/new')
@login_required
def new():
    return render_template('medicines/form.html', suppliers=_suppliers(), medicine=None, form_data={})


@bp.route('/medicines', methods=['POST'])
@login_required
def create():
    try:
        data = MedicineFormData.from_form(request.form)
        medicine = MedicineManager.create(data)
    except MedicineValidationError as e:
        db.session.rollback()
        logger.warning(f"Medicine create rejected for {current_user.username}: {e}")
        return render_template('medicines/form.html',
                               suppliers=_suppliers(),
                               medicine=None,
                               form_data=request.form,
                               error=str(e)), 400

    flash(f'Medicine "{medicine.name}" added', 'success')
    return redirect(url_for('medicines.list'))


@bp.route('/medicines/<int:medicine_id>/edit')
@login_required
def edit(medicine_id):
    medicine = db.get_or_404(Medicine, medicine_id)
    return render_template('medicines/form.html', suppliers=_suppliers(), medicine=medicine, form_data={})


@bp.route('/medicines/<int:medicine_id>', methods=['POST'])
@login_required
def update(medicine_id):
    medicine = db.get_or_404(Medicine, medicine_id)
    try:
        data = MedicineFormData.from_form(request.form)
        MedicineManager.update(medicine, data)
    except MedicineValidationError as e:
        db.session.rollback()
        logger.warning(f"Medicine {medicine_id} update rejected for {current_user.username}: {e}")
        return render_template('medicines/form.html',
                               suppliers=_suppliers(),
                               medicine=medicine,
                               form_data=request.form,
                               error=str(e)), 400

    flash(f'Medicine "{medicine.name}" updated', 'success')
    return redirect(url_for('medicines.list'))


@bp.route('/expiring')
@login_required
def expiring():
    window_days = get_config().expiring_window_days
    expired, expiring_soon = MedicineSearchService.expiring(date.today(), window_days)
    return render_template('medicines/expiring.html',
                           expired=expired,
                           expiring_soon=expiring_soon,
                           window_days=window_days)


@bp.route('/medicines/low-stock')
@login_required
def low_stock():
    return render_template('medicines/low_stock.html',
                           medicines=MedicineSearchService.low_stock(),
                           threshold=LOW_STOCK_THRESHOLD)
