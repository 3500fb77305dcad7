"""
Domain exceptions for billing app.

Exception Hierarchy:
    BillingServiceError (base)
    ├── BillNotFoundError
    ├── BillingEntityNotFoundError
    ├── NoBillableOrdersError
    ├── NoCustomerBillsError
    ├── InvalidPaymentError
    └── PartialCompanyPaymentError

Usage:
    from apps.billing.exceptions import PartialCompanyPaymentError

    if amount != bill.balance_amount:
        raise PartialCompanyPaymentError(
            "Company payments must be full payment only"
        )
"""


class BillingServiceError(Exception):
    """
    Base exception for billing service errors.

    Views catch the subclasses they translate to 404 and render the rest
    as 400:

        try:
            bill = generate_bill_for_entity(...)
        except BillingServiceError as e:
            return Response({'success': False, 'message': str(e)}, status=400)
    """
    pass


class BillNotFoundError(BillingServiceError):
    """Raised when a bill does not exist."""
    pass


class BillingEntityNotFoundError(BillingServiceError):
    """
    Raised when the customer or company being billed does not exist.

    Example:
        raise BillingEntityNotFoundError("Customer not found")
    """
    pass


class NoBillableOrdersError(BillingServiceError):
    """Raised when a customer has no order items in the billing period."""
    pass


class NoCustomerBillsError(BillingServiceError):
    """Raised when a company has no customer bills to consolidate."""
    pass


class InvalidPaymentError(BillingServiceError):
    """Raised when a payment targets a bill of another entity or a cancelled bill."""
    pass


class PartialCompanyPaymentError(BillingServiceError):
    """Raised when a company pays less or more than a bill's full balance."""
    pass
