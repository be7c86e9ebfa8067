from .customer_repository import CustomerRepository

__all__ = [
    "CustomerRepository",
]
