"""Concrete repository implementation for Customer backed by SQLAlchemy."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from crm.application.interfaces import CustomerRepository
from crm.domain.entities import Customer
from crm.infrastructure.database.models import CustomerModel


class SQLAlchemyCustomerRepository(CustomerRepository):
    """Implements the CustomerRepository port using SQLAlchemy async sessions.

    Timestamps are not copied onto the model: the session's before_flush
    hook stamps them, and they are read back after each flush.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CustomerModel) -> Customer:
        """Map ORM model → domain entity."""
        return Customer(
            id=model.id,
            name=model.name,
            customer_type=model.customer_type,
            industry=model.industry,
            email=model.email,
            phone=model.phone,
            website=model.website,
            notes=model.notes,
            created_date=model.created_date,
            modified_date=model.modified_date,
        )

    def _to_model(self, entity: Customer) -> CustomerModel:
        """Map domain entity → ORM model (for creation)."""
        return CustomerModel(
            name=entity.name,
            customer_type=entity.customer_type,
            industry=entity.industry,
            email=entity.email,
            phone=entity.phone,
            website=entity.website,
            notes=entity.notes,
        )

    async def get_by_id(self, customer_id: int) -> Customer | None:
        result = await self._session.get(CustomerModel, customer_id)
        return self._to_entity(result) if result else None

    async def get_by_email(self, email: str) -> Customer | None:
        stmt = select(CustomerModel).where(CustomerModel.email == email).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(
        self,
        *,
        customer_type: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Customer]:
        stmt = select(CustomerModel)
        if customer_type is not None:
            stmt = stmt.where(CustomerModel.customer_type == customer_type)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(CustomerModel.name.ilike(pattern), CustomerModel.email.ilike(pattern))
            )

        stmt = stmt.order_by(CustomerModel.name, CustomerModel.id).offset(skip).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, customer: Customer) -> Customer:
        model = self._to_model(customer)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, customer: Customer) -> Customer:
        model = await self._session.get(CustomerModel, customer.id)
        if model is None:
            raise ValueError(f"Customer {customer.id} not found in database")
        model.name = customer.name
        model.customer_type = customer.customer_type
        model.industry = customer.industry
        model.email = customer.email
        model.phone = customer.phone
        model.website = customer.website
        model.notes = customer.notes
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, customer_id: int) -> bool:
        model = await self._session.get(CustomerModel, customer_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
