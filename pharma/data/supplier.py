import re

from sqlalchemy.orm import validates

from pharma import db
from pharma.data.base import TimestampedBase

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def is_valid_email(value) -> bool:
    return bool(value) and EMAIL_PATTERN.match(value) is not None


class Supplier(TimestampedBase):
    """Wholesaler a medicine is bought from"""

    name = db.Column(db.String(255), nullable=False, unique=True, index=True)
    contact = db.Column(db.String(255))
    email = db.Column(db.String(255))

    medicines = db.relationship('Medicine', back_populates='supplier', order_by='Medicine.name')

    @validates('email')
    def validate_email(self, key, value):
        if value in (None, ''):
            return None
        if not is_valid_email(value):
            raise ValueError(f"Invalid email address: {value}")
        return value

    def __repr__(self):
        return f'<Supplier {self.name}>'
