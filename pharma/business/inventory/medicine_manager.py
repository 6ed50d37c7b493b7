"""
Medicine create/edit (including restock through the stock field).

Form values arrive as strings; MedicineFormData parses and validates them
before anything touches the session.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from pharma import db
from pharma.business.errors import MedicineValidationError
from pharma.data.base import MAX_DB_INTEGER
from pharma.data.medicine import Medicine
from pharma.data.supplier import Supplier
from pharma.logger import get_logger

logger = get_logger("pharma.business.inventory.medicines")

PRICE_QUANTUM = Decimal('0.01')
# Numeric(10, 2)
MAX_PRICE = Decimal('99999999.99')


@dataclass
class MedicineFormData:
    name: str
    supplier_id: Optional[int]
    price: Decimal
    stock: int
    expiry_date: Optional[date]

    @classmethod
    def from_form(cls, form, today: Optional[date] = None) -> 'MedicineFormData':
        """
        Parse a submitted medicine form.

        Raises:
            MedicineValidationError: first problem found, as a user-facing message
        """
        today = today or date.today()

        name = (form.get('name') or '').strip()
        if not name:
            raise MedicineValidationError('Medicine name is required.')

        price = _parse_price(form.get('price'))
        stock = _parse_stock(form.get('stock'))
        supplier_id = _parse_supplier_id(form.get('supplier_id'))
        expiry_date = _parse_date(form.get('expiry_date'))

        if expiry_date is not None and expiry_date < today:
            raise MedicineValidationError('Expiry date cannot be in the past.')

        return cls(
            name=name,
            supplier_id=supplier_id,
            price=price,
            stock=stock,
            expiry_date=expiry_date,
        )


def _parse_price(raw) -> Decimal:
    text = (raw or '').strip()
    if not text:
        return Decimal('0.00')
    try:
        price = Decimal(text)
    except InvalidOperation:
        raise MedicineValidationError(f'Price must be a number, got "{text}".')
    if not price.is_finite():
        raise MedicineValidationError(f'Price must be a number, got "{text}".')
    if price < 0:
        raise MedicineValidationError('Price cannot be negative.')
    if price > MAX_PRICE:
        raise MedicineValidationError(f'Price cannot exceed {MAX_PRICE}.')
    return price.quantize(PRICE_QUANTUM)


def _parse_stock(raw) -> int:
    text = (raw or '').strip()
    if not text:
        return 0
    try:
        stock = int(text)
    except ValueError:
        raise MedicineValidationError(f'Stock must be a whole number, got "{text}".')
    if stock < 0:
        raise MedicineValidationError('Stock cannot be negative.')
    if stock > MAX_DB_INTEGER:
        raise MedicineValidationError('Stock is too large.')
    return stock


def _parse_supplier_id(raw) -> Optional[int]:
    text = (raw or '').strip()
    if not text:
        return None
    try:
        supplier_id = int(text)
    except ValueError:
        raise MedicineValidationError('Unknown supplier.')
    if not 0 < supplier_id <= MAX_DB_INTEGER:
        raise MedicineValidationError('Unknown supplier.')
    return supplier_id


def _parse_date(raw) -> Optional[date]:
    text = (raw or '').strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, '%Y-%m-%d').date()
    except ValueError:
        raise MedicineValidationError(f'Expiry date must be YYYY-MM-DD, got "{text}".')


class MedicineManager:
    """Writes for medicines. Stock edits here are restocks; orders go through OrderPlacementManager."""

    @staticmethod
    def _check_supplier(supplier_id: Optional[int]) -> None:
        if supplier_id is not None and db.session.get(Supplier, supplier_id) is None:
            raise MedicineValidationError('Unknown supplier.')

    @classmethod
    def create(cls, data: MedicineFormData) -> Medicine:
        cls._check_supplier(data.supplier_id)
        medicine = Medicine(
            name=data.name,
            supplier_id=data.supplier_id,
            price=data.price,
            stock=data.stock,
            expiry_date=data.expiry_date,
        )
        db.session.add(medicine)
        db.session.commit()
        logger.info(f"Medicine {medicine.id} '{medicine.name}' created with stock {medicine.stock}")
        return medicine

    @classmethod
    def update(cls, medicine: Medicine, data: MedicineFormData) -> Medicine:
        cls._check_supplier(data.supplier_id)
        previous_stock = medicine.stock
        medicine.name = data.name
        medicine.supplier_id = data.supplier_id
        medicine.price = data.price
        medicine.stock = data.stock
        medicine.expiry_date = data.expiry_date
        db.session.commit()
        if previous_stock != medicine.stock:
            logger.info(f"Medicine {medicine.id} stock changed {previous_stock} -> {medicine.stock}")
        return medicine
