"""CRM data context — the persisted entity sets and the two save paths.

``CrmDataContext`` wraps a blocking ``Session``; ``AsyncCrmDataContext``
wraps an ``AsyncSession`` and accepts a cancellation signal. Both stamp
customer timestamps immediately before committing.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from crm.domain.exceptions import SaveCancelledError
from crm.infrastructure.database.base import Base
from crm.infrastructure.database.models import (
    AddressModel,
    ContactModel,
    CustomerModel,
    LeadModel,
    OpportunityModel,
    ProductCategoryModel,
    ProductModel,
    RewardModel,
    SaleModel,
    ServiceCategoryModel,
    ServiceModel,
    SupportCaseModel,
    TodoTaskModel,
    VendorModel,
)
from crm.infrastructure.database.timestamps import (
    PendingChange,
    TimestampMaintainer,
    collect_pending_changes,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class EntitySet(Generic[ModelT]):
    """A persisted set of one model type, bound to a session."""

    def __init__(self, model: type[ModelT], session: Session | AsyncSession):
        self.model = model
        self._session = session

    def select(self) -> Select:
        """Start a SELECT over this set."""
        return select(self.model)

    def add(self, entity: ModelT) -> None:
        """Stage a new entity for insertion on the next save."""
        if not isinstance(entity, self.model):
            raise TypeError(
                f"{type(entity).__name__} cannot be added to the {self.model.__name__} set"
            )
        self._session.add(entity)


class _EntitySetDescriptor(Generic[ModelT]):
    def __init__(self, model: type[ModelT]):
        self.model = model

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return EntitySet(self.model, instance.session)


def entity_set(model: type[ModelT]) -> Any:
    """Declare an entity set attribute on a data context."""
    return _EntitySetDescriptor(model)


class _DataContextBase(ABC):
    customers = entity_set(CustomerModel)
    addresses = entity_set(AddressModel)
    product_categories = entity_set(ProductCategoryModel)
    service_categories = entity_set(ServiceCategoryModel)
    contacts = entity_set(ContactModel)
    opportunities = entity_set(OpportunityModel)
    leads = entity_set(LeadModel)
    products = entity_set(ProductModel)
    services = entity_set(ServiceModel)
    sales = entity_set(SaleModel)
    vendors = entity_set(VendorModel)
    support_cases = entity_set(SupportCaseModel)
    todo_tasks = entity_set(TodoTaskModel)
    rewards = entity_set(RewardModel)

    def __init__(self, maintainer: TimestampMaintainer | None):
        self._maintainer = maintainer or TimestampMaintainer()

    @property
    @abstractmethod
    def _unit_of_work(self) -> Session:
        """The synchronous session the context saves through."""

    @classmethod
    def entity_sets(cls) -> dict[str, type[Base]]:
        """Name → model mapping of every declared set."""
        return {
            name: attr.model
            for klass in reversed(cls.__mro__)
            for name, attr in vars(klass).items()
            if isinstance(attr, _EntitySetDescriptor)
        }

    def pending_changes(self) -> list[PendingChange]:
        """The changes the next save would commit."""
        return collect_pending_changes(self._unit_of_work)

    def _prepare_save(self) -> int:
        """Stamp pending changes and count the entities the commit will write."""
        session = self._unit_of_work
        stamped = self._maintainer.stamp_session(session)
        affected = (
            len(session.new)
            + len(session.deleted)
            + sum(1 for obj in session.dirty if session.is_modified(obj))
        )
        logger.debug("Saving %d change(s), %d customer(s) stamped", affected, stamped)
        return affected


class CrmDataContext(_DataContextBase):
    """Blocking data context over a synchronous ``Session``."""

    def __init__(self, session: Session, maintainer: TimestampMaintainer | None = None):
        super().__init__(maintainer)
        self.session = session

    @property
    def _unit_of_work(self) -> Session:
        return self.session

    def save_changes(self) -> int:
        """Stamp timestamps, commit, and return the number of entities written."""
        affected = self._prepare_save()
        try:
            self.session.commit()
        finally:
            TimestampMaintainer.release(self.session)
        return affected


class AsyncCrmDataContext(_DataContextBase):
    """Non-blocking data context over an ``AsyncSession``."""

    def __init__(self, session: AsyncSession, maintainer: TimestampMaintainer | None = None):
        super().__init__(maintainer)
        self.session = session

    @property
    def _unit_of_work(self) -> Session:
        return self.session.sync_session

    async def save_changes(self, cancel: asyncio.Event | None = None) -> int:
        """Stamp timestamps, then commit unless ``cancel`` is already set.

        On cancellation nothing is committed and ``SaveCancelledError`` is
        raised; the in-memory stamps and pending changes stay in the session.
        """
        affected = self._prepare_save()
        try:
            if cancel is not None and cancel.is_set():
                logger.info("Save cancelled before commit — %d change(s) left pending", affected)
                raise SaveCancelledError(affected)
            await self.session.commit()
        finally:
            TimestampMaintainer.release(self._unit_of_work)
        return affected
