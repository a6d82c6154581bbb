# backend/services/errors.py


class InventoryError(Exception):
    """Base exception for inventory core operations."""

    kind = "InventoryError"
    default_message = "An error occurred in the inventory core"

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            code: Optional machine-readable error code
            details: Additional error details
        """
        self.message = message or self.default_message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.kind,
            'message': self.message,
        }

        if self.code:
            error_dict['code'] = self.code

        if self.details:
            error_dict['details'] = self.details

        return error_dict


class NotFound(InventoryError):
    """A referenced entity id does not resolve."""

    kind = "NotFound"
    default_message = "Entity not found"


class InvalidInput(InventoryError):
    """Malformed, missing or out-of-range field."""

    kind = "InvalidInput"
    default_message = "Invalid input"


class InsufficientStock(InventoryError):
    """A sale would drive product quantity below zero."""

    kind = "InsufficientStock"
    default_message = "Not enough stock to subtract."


class DependencyFailure(InventoryError):
    """The blob store or the persistence layer failed."""

    kind = "DependencyFailure"
    default_message = "Dependency failure"
