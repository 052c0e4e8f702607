# app/routers/customers.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.auth import get_current_user
from app.schemas.customer import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
)
from app.store import RecordStore, get_store

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
)


@router.get("", response_model=list[CustomerResponse])
def list_customers(
    search: Optional[str] = Query(None),
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    search = search.strip() if search else None

    return store.list_customers(search=search or None)


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_customer(
    customer_data: CustomerCreate,
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    return store.create_customer(customer_data.model_dump())


# Registered ahead of /{customer_id} so "bulk-delete" is never read as an id
@router.post("/bulk-delete", response_model=BulkDeleteResponse)
def bulk_delete_customers(
    request_data: BulkDeleteRequest,
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    deleted = store.delete_customers(request_data.ids)

    return {"deleted": deleted}


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    customer = store.get_customer(customer_id)

    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    return customer


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    customer_data: CustomerUpdate,
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    customer = store.update_customer(customer_id, customer_data.model_dump())

    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    return customer


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: int,
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    if not store.delete_customer(customer_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    return None
