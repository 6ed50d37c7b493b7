"""
Supplier routes
"""

from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_required

from pharma import db
from pharma.business.errors import SupplierValidationError
from pharma.business.inventory.supplier_manager import SupplierManager
from pharma.data.supplier import Supplier
from pharma.logger import get_logger

bp = Blueprint('suppliers', __name__)
logger = get_logger("pharma.routes.suppliers")


@bp.route('/suppliers')
@login_required
def list():
    suppliers = Supplier.query.order_by(Supplier.name.asc()).all()
    return render_template('suppliers/list.html', suppliers=suppliers)


@bp.route('/suppliers/new')
@login_required
def new():
    return render_template('suppliers/form.html', supplier=None, form_data={})


@bp.route('/suppliers', methods=['POST'])
@login_required
def create():
    try:
        supplier = SupplierManager.create(request.form)
    except SupplierValidationError as e:
        db.session.rollback()
        logger.warning(f"Supplier create rejected: {e}")
        return render_template('suppliers/form.html', supplier=None, form_data=request.form, error=str(e)), 400

    flash(f'Supplier "{supplier.name}" added', 'success')
    return redirect(url_for('suppliers.list'))


@bp.route('/suppliers/<int:supplier_id>/edit', methods=['GET', 'POST'])
@login_required
def edit(supplier_id):
    supplier = db.get_or_404(Supplier, supplier_id)

    if request.method == 'POST':
        try:
            SupplierManager.update(supplier, request.form)
        except SupplierValidationError as e:
            db.session.rollback()
            logger.warning(f"Supplier {supplier_id} update rejected: {e}")
            return render_template('suppliers/form.html', supplier=supplier, form_data=request.form, error=str(e)), 400

        flash(f'Supplier "{supplier.name}" updated', 'success')
        return redirect(url_for('suppliers.list'))

    return render_template('suppliers/form.html', supplier=supplier, form_data={})
