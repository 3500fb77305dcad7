"""
Domain exceptions for orders app.

Exception Hierarchy:
    OrdersServiceError (base)
    ├── InvalidBagFormatError
    ├── DailyOrdersAlreadyExistError
    ├── DailyOrderNotFoundError
    └── OrderItemNotFoundError
"""


class OrdersServiceError(Exception):
    """Base exception for orders service errors."""
    pass


class InvalidBagFormatError(OrdersServiceError):
    """
    Raised when a bag format string cannot be parsed.

    Example:
        raise InvalidBagFormatError("'x' is not a whole number (veg counts)")
    """
    pass


class DailyOrdersAlreadyExistError(OrdersServiceError):
    """Raised when generating orders for a date that already has them."""
    pass


class DailyOrderNotFoundError(OrdersServiceError):
    """Raised when the daily order does not exist."""
    pass


class OrderItemNotFoundError(OrdersServiceError):
    """Raised when the order item does not belong to the daily order."""
    pass
