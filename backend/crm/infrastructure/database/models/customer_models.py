"""SQLAlchemy ORM models for customers and their addresses and contacts."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crm.infrastructure.database.base import Base


class CustomerModel(Base):
    """ORM model — maps to the 'customers' table.

    ``created_date`` / ``modified_date`` have no column defaults: they are
    stamped by the timestamp maintainer before every flush.
    """

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # indexed, so capped at the utf8mb4-safe key length
    name: Mapped[str] = mapped_column(String(191), nullable=False)
    customer_type: Mapped[str] = mapped_column(String(50), nullable=False, default="Business")
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # indexed, so capped at the utf8mb4-safe key length
    email: Mapped[str | None] = mapped_column(String(191), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    modified_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_customers_name", "name"),
        Index("ix_customers_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<CustomerModel(id={self.id}, name='{self.name}')>"


class AddressModel(Base):
    """ORM model — maps to the 'addresses' table."""

    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    address_type: Mapped[str] = mapped_column(String(50), nullable=False, default="Billing")
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False)


class ContactModel(Base):
    """ORM model — maps to the 'contacts' table."""

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    customer_id: Mapped[int | None] = mapped_column(
        ForeignKey("customers.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<ContactModel(id={self.id}, name='{self.first_name} {self.last_name}')>"
