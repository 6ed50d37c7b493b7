from flask import Blueprint, redirect, url_for
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from pharma import db
from pharma.logger import get_logger
from pharma.services.medicine_search_service import MedicineSearchService

logger = get_logger("pharma.routes.main")
main = Blueprint('main', __name__)


@main.route('/')
def index():
    if not current_user.is_authenticated:
        return redirect(url_for('auth.login'))
    return redirect(url_for('medicines.list'))


@main.app_context_processor
def inject_low_stock_count():
    """Navigation badge; a failing count must not take the page down with it."""
    try:
        count = MedicineSearchService.count_low_stock()
    except SQLAlchemyError as e:
        logger.warning(f"Low stock count unavailable: {e}")
        db.session.rollback()
        count = 0
    return {'low_stock_count': count}
