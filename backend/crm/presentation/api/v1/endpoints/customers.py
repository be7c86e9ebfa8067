"""Customer CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from crm.application.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
)
from crm.application.services import CustomerService
from crm.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from crm.infrastructure.dependencies import get_customer_service

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    customer_type: str | None = Query(None, description="Filter by customer type"),
    search: str | None = Query(None, description="Match against name or email"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: CustomerService = Depends(get_customer_service),
) -> list[CustomerResponse]:
    """Retrieve a filtered, paginated list of customers."""
    customers = await service.list_customers(
        customer_type=customer_type,
        search=search,
        skip=skip,
        limit=limit,
    )
    return [CustomerResponse.model_validate(c, from_attributes=True) for c in customers]


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    """Retrieve a single customer by ID."""
    try:
        customer = await service.get_customer(customer_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    data: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    """Create a new customer."""
    try:
        customer = await service.create_customer(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    """Update an existing customer."""
    try:
        customer = await service.update_customer(customer_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
) -> None:
    """Delete a customer by ID."""
    try:
        await service.delete_customer(customer_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
