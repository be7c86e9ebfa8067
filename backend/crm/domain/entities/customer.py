"""Domain entity — pure Python business object for CRM customers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Customer:
    """Core domain entity representing a customer account.

    ``created_date`` and ``modified_date`` are owned by the persistence layer:
    they are stamped when the customer is flushed, never by callers.
    """

    name: str
    customer_type: str = "Business"
    industry: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    notes: str | None = None
    id: int | None = None
    created_date: datetime | None = None
    modified_date: datetime | None = None

    def update(
        self,
        name: str | None = None,
        customer_type: str | None = None,
        industry: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        website: str | None = None,
        notes: str | None = None,
    ) -> None:
        """Update the provided fields; None leaves a field unchanged."""
        if name is not None:
            self.name = name
        if customer_type is not None:
            self.customer_type = customer_type
        if industry is not None:
            self.industry = industry
        if email is not None:
            self.email = email
        if phone is not None:
            self.phone = phone
        if website is not None:
            self.website = website
        if notes is not None:
            self.notes = notes
