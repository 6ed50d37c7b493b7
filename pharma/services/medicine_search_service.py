"""pharma.services.medicine_search_service

Read-only queries behind the medicine list, expiring and low-stock screens.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy.orm import joinedload

from pharma.data.medicine import Medicine


def _optional_int(value) -> Optional[int]:
    try:
        return int(value) if value not in (None, '') else None
    except (TypeError, ValueError):
        return None


def _optional_decimal(value) -> Optional[Decimal]:
    if value in (None, ''):
        return None
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _optional_date(value) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(str(value), '%Y-%m-%d').date()
    except ValueError:
        return None


@dataclass(frozen=True)
class MedicineFilters:
    q: Optional[str] = None
    supplier_id: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    stock_less_than: Optional[int] = None
    expiry_before: Optional[date] = None

    @classmethod
    def from_args(cls, args) -> 'MedicineFilters':
        """Build from request.args; values that do not parse are dropped."""
        q = (args.get('q') or '').strip() or None
        return cls(
            q=q,
            supplier_id=_optional_int(args.get('supplier')),
            min_price=_optional_decimal(args.get('min_price')),
            max_price=_optional_decimal(args.get('max_price')),
            stock_less_than=_optional_int(args.get('stock_less_than')),
            expiry_before=_optional_date(args.get('expiry_before')),
        )

    def as_form_values(self) -> dict:
        """Echo back into the filter form"""
        return {
            'q': self.q or '',
            'supplier': self.supplier_id or '',
            'min_price': '' if self.min_price is None else self.min_price,
            'max_price': '' if self.max_price is None else self.max_price,
            'stock_less_than': '' if self.stock_less_than is None else self.stock_less_than,
            'expiry_before': self.expiry_before.isoformat() if self.expiry_before else '',
        }


class MedicineSearchService:

    @staticmethod
    def search(filters: MedicineFilters) -> list[Medicine]:
        query = Medicine.query.options(joinedload(Medicine.supplier))

        if filters.q:
            query = query.filter(Medicine.name.ilike(f'%{filters.q}%'))
        if filters.min_price is not None:
            query = query.filter(Medicine.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Medicine.price <= filters.max_price)
        if filters.stock_less_than is not None:
            query = query.filter(Medicine.stock <= filters.stock_less_than)
        if filters.expiry_before is not None:
            query = query.filter(Medicine.expiry_date <= filters.expiry_before)
        if filters.supplier_id is not None:
            query = query.filter(Medicine.supplier_id == filters.supplier_id)

        return query.order_by(Medicine.name.asc()).all()

    @staticmethod
    def expiring(today: Optional[date] = None, window_days: int = 30) -> tuple[list[Medicine], list[Medicine]]:
        """
        Split medicines with an expiry date into (expired, expiring soon).

        Expired: expiry on or before today. Expiring soon: after today and
        within window_days.
        """
        today = today or date.today()
        soon = today + timedelta(days=window_days)

        expired = (
            Medicine.query.options(joinedload(Medicine.supplier))
            .filter(Medicine.expiry_date.isnot(None), Medicine.expiry_date <= today)
            .order_by(Medicine.expiry_date.asc())
            .all()
        )
        expiring_soon = (
            Medicine.query.options(joinedload(Medicine.supplier))
            .filter(Medicine.expiry_date > today, Medicine.expiry_date <= soon)
            .order_by(Medicine.expiry_date.asc())
            .all()
        )
        return expired, expiring_soon

    @staticmethod
    def low_stock() -> list[Medicine]:
        return (
            Medicine.query.options(joinedload(Medicine.supplier))
            .filter(Medicine.low_stock_flag.is_(True))
            .order_by(Medicine.stock.asc(), Medicine.name.asc())
            .all()
        )

    @staticmethod
    def count_low_stock() -> int:
        return Medicine.query.filter(Medicine.low_stock_flag.is_(True)).count()

    @staticmethod
    def orderable() -> list[Medicine]:
        return Medicine.query.filter(Medicine.stock > 0).order_by(Medicine.name.asc()).all()
