"""Application service (use case) for Customer operations."""

from crm.application.interfaces import CustomerRepository
from crm.application.schemas.customer import CustomerCreate, CustomerUpdate
from crm.domain.entities import Customer
from crm.domain.exceptions import DuplicateEntityError, EntityNotFoundError


class CustomerService:
    """Orchestrates customer CRUD logic. Depends on the repository port (DI)."""

    def __init__(self, repository: CustomerRepository):
        self._repository = repository

    async def get_customer(self, customer_id: int) -> Customer:
        customer = await self._repository.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError("Customer", customer_id)
        return customer

    async def list_customers(
        self,
        *,
        customer_type: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Customer]:
        return await self._repository.get_all(
            customer_type=customer_type,
            search=search,
            skip=skip,
            limit=limit,
        )

    async def create_customer(self, data: CustomerCreate) -> Customer:
        if data.email:
            await self._ensure_email_free(data.email)
        customer = Customer(
            name=data.name,
            customer_type=data.customer_type,
            industry=data.industry,
            email=data.email,
            phone=data.phone,
            website=data.website,
            notes=data.notes,
        )
        return await self._repository.create(customer)

    async def update_customer(self, customer_id: int, data: CustomerUpdate) -> Customer:
        customer = await self.get_customer(customer_id)
        if data.email and data.email != customer.email:
            await self._ensure_email_free(data.email, exclude_id=customer_id)

        customer.update(**data.model_dump(exclude_unset=True))
        return await self._repository.update(customer)

    async def delete_customer(self, customer_id: int) -> bool:
        exists = await self._repository.get_by_id(customer_id)
        if exists is None:
            raise EntityNotFoundError("Customer", customer_id)
        return await self._repository.delete(customer_id)

    async def _ensure_email_free(self, email: str, exclude_id: int | None = None) -> None:
        existing = await self._repository.get_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityError("Customer", "email", email)
