"""Pydantic DTOs (Data Transfer Objects) for the Customer feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    """Schema for creating a new customer."""

    name: str = Field(..., min_length=1, max_length=191, examples=["Contoso Ltd."])
    customer_type: str = Field("Business", min_length=1, max_length=50, examples=["Business"])
    industry: str | None = Field(None, max_length=100, examples=["Manufacturing"])
    email: str | None = Field(None, max_length=191, examples=["sales@contoso.example"])
    phone: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=255)
    notes: str | None = None


class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer — all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=191)
    customer_type: str | None = Field(None, min_length=1, max_length=50)
    industry: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=191)
    phone: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=255)
    notes: str | None = None


class CustomerResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    name: str
    customer_type: str
    industry: str | None
    email: str | None
    phone: str | None
    website: str | None
    notes: str | None
    created_date: datetime | None
    modified_date: datetime | None

    model_config = {"from_attributes": True}
