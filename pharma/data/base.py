from datetime import datetime

from sqlalchemy.orm import declared_attr

from pharma import db
from pharma.business.data_insertion_mixin import DataInsertionMixin

# Largest value every supported backend stores in an INTEGER column (PostgreSQL is 32-bit)
MAX_DB_INTEGER = 2 ** 31 - 1


class TimestampedBase(db.Model, DataInsertionMixin):
    """Abstract base class for inventory entities with created/updated stamps"""

    __abstract__ = True

    @declared_attr
    def __tablename__(cls):
        return cls.__name__.lower() + 's'

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
