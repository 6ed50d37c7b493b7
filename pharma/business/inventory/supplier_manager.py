from typing import Optional

from sqlalchemy.exc import IntegrityError

from pharma import db
from pharma.business.errors import SupplierValidationError
from pharma.data.supplier import Supplier, is_valid_email
from pharma.logger import get_logger

logger = get_logger("pharma.business.inventory.suppliers")


class SupplierManager:

    @staticmethod
    def _clean(form) -> dict:
        name = (form.get('name') or '').strip()
        contact = (form.get('contact') or '').strip() or None
        email = (form.get('email') or '').strip() or None
        if not name:
            raise SupplierValidationError('Supplier name is required.')
        if email and not is_valid_email(email):
            raise SupplierValidationError(f'"{email}" is not a valid email address.')
        return {'name': name, 'contact': contact, 'email': email}

    @staticmethod
    def _check_unique_name(name: str, supplier_id: Optional[int] = None) -> None:
        existing = Supplier.query.filter_by(name=name).first()
        if existing is not None and existing.id != supplier_id:
            raise SupplierValidationError(f'A supplier named "{name}" already exists.')

    @classmethod
    def create(cls, form) -> Supplier:
        values = cls._clean(form)
        cls._check_unique_name(values['name'])
        supplier = Supplier(**values)
        db.session.add(supplier)
        cls._commit(values['name'])
        logger.info(f"Supplier {supplier.id} '{supplier.name}' created")
        return supplier

    @classmethod
    def update(cls, supplier: Supplier, form) -> Supplier:
        values = cls._clean(form)
        cls._check_unique_name(values['name'], supplier.id)
        for key, value in values.items():
            setattr(supplier, key, value)
        cls._commit(values['name'])
        logger.info(f"Supplier {supplier.id} updated")
        return supplier

    @staticmethod
    def _commit(name: str) -> None:
        # The unique index still wins a race between two identical submissions
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise SupplierValidationError(f'A supplier named "{name}" already exists.')
