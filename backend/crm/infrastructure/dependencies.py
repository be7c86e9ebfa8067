"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crm.application.services import CustomerService
from crm.infrastructure.database.repositories import SQLAlchemyCustomerRepository
from crm.infrastructure.database.session import get_db_session


async def get_customer_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CustomerService, None]:
    """Provides a CustomerService instance with its repository wired up."""
    repository = SQLAlchemyCustomerRepository(session)
    yield CustomerService(repository)
