"""Abstract repository interface (port) for Customer persistence."""

from abc import ABC, abstractmethod

from crm.domain.entities import Customer


class CustomerRepository(ABC):
    """Port for customer persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, customer_id: int) -> Customer | None:
        """Retrieve a single customer by primary key."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Customer | None:
        """Retrieve the customer registered with ``email``, if any."""
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        customer_type: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Customer]:
        """Retrieve a filtered, paginated list of customers."""
        ...

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """Persist a new customer and return it with its timestamps."""
        ...

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        """Update an existing customer."""
        ...

    @abstractmethod
    async def delete(self, customer_id: int) -> bool:
        """Delete a customer. Returns True if deleted, False if not found."""
        ...
