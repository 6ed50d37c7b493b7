"""
Domain exceptions for pharmacy business logic

Raised by the business layer; routes translate them into flashes or JSON.
"""


class PharmaDomainError(Exception):
    """Base exception for all pharmacy domain errors"""
    pass


class MedicineValidationError(PharmaDomainError):
    """Raised when submitted medicine data is rejected"""
    pass


class SupplierValidationError(PharmaDomainError):
    """Raised when submitted supplier data is rejected"""
    pass


class OrderPlacementError(PharmaDomainError):
    """Base for failures of order placement. Nothing was written when raised."""
    kind = 'order_placement_error'
    http_status = 400

    def to_dict(self):
        return {'kind': self.kind, 'message': str(self)}


class InvalidOrderInput(OrderPlacementError):
    """Malformed or empty item list; raised before any transaction is opened"""
    kind = 'invalid_input'
    http_status = 400


class MedicineNotFound(OrderPlacementError):
    kind = 'medicine_not_found'
    http_status = 404

    def __init__(self, medicine_id):
        self.medicine_id = medicine_id
        super().__init__(f"Medicine not found: {medicine_id}")


class InsufficientStock(OrderPlacementError):
    kind = 'insufficient_stock'
    http_status = 409

    def __init__(self, medicine_name, requested, available):
        self.medicine_name = medicine_name
        self.requested = requested
        self.available = available
        self.shortfall = requested - available
        super().__init__(
            f"Insufficient stock for {medicine_name}: requested {requested}, "
            f"available {available} (short by {self.shortfall})"
        )


class PersistenceFailure(OrderPlacementError):
    """Wraps an underlying storage error; the message is passed through as-is"""
    kind = 'persistence_failure'
    http_status = 500
