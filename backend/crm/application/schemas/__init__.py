from .customer import CustomerCreate, CustomerUpdate, CustomerResponse

__all__ = [
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
]
