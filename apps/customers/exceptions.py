"""
Domain exceptions for customers app.

Exception Hierarchy:
    CustomersServiceError (base)
    ├── CustomerNotFoundError
    ├── CompanyNotFoundError
    ├── DuplicateCompanyError
    └── CompanyHasCustomersError
"""


class CustomersServiceError(Exception):
    """Base exception for customer and company services."""
    pass


class CustomerNotFoundError(CustomersServiceError):
    """Raised when the customer does not exist."""
    pass


class CompanyNotFoundError(CustomersServiceError):
    """Raised when the company does not exist."""
    pass


class DuplicateCompanyError(CustomersServiceError):
    """Raised when another company already uses the name (case-insensitive)."""
    pass


class CompanyHasCustomersError(CustomersServiceError):
    """Raised when deleting a company that still has customers."""
    pass
