"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict so seeding and the JSON API share one
column-aware conversion.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import inspect

from pharma import db
from pharma.logger import get_logger

logger = get_logger("pharma.business.data_insertion")


class DataInsertionMixin:
    """
    Mixin that adds:
    - from_dict(): build an instance from a dictionary, ignoring unknown keys
    - to_dict(): JSON-ready dictionary of column values
    - bulk_create_from_dicts(): add many instances to the session
    """

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not added to the session)
        """
        skip_fields = set(skip_fields or ())
        columns = {c.key for c in inspect(cls).columns}

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            if key in ('created_at', 'updated_at') and value is None:
                continue
            filtered_data[key] = value

        instance = cls(**filtered_data)

        if 'password' in data_dict and hasattr(instance, 'set_password'):
            instance.set_password(data_dict['password'])

        return instance

    @classmethod
    def bulk_create_from_dicts(cls, data_list, skip_fields=None):
        """
        Add one instance per dictionary to the current session and flush.

        Returns:
            list: Created instances (ids populated, not committed)
        """
        instances = [cls.from_dict(data, skip_fields=skip_fields) for data in data_list]
        db.session.add_all(instances)
        db.session.flush()
        logger.debug(f"Bulk created {len(instances)} {cls.__name__} rows")
        return instances

    def to_dict(self, exclude=None):
        """
        Convert the column values to a JSON-serializable dictionary.

        Decimals become strings so money keeps its scale; dates become ISO strings.
        """
        exclude = set(exclude or ())
        result = {}
        for column in inspect(self.__class__).columns:
            if column.key in exclude:
                continue
            value = getattr(self, column.key)
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, (datetime, date)):
                value = value.isoformat()
            result[column.key] = value
        return result
