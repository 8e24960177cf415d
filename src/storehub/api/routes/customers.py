"""Customer endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import StorehubError
from ...schemas.customers import CustomerInput
from ...schemas.records import CustomerRecord, customer_to_record
from ...services.customers import CustomerService
from ..dependencies import get_customer_service
from ..errors import http_error

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=List[CustomerRecord], status_code=status.HTTP_200_OK)
def list_customers(service: CustomerService = Depends(get_customer_service)) -> List[CustomerRecord]:
    return [customer_to_record(customer) for customer in service.list_customers()]


@router.post("", response_model=CustomerRecord, status_code=status.HTTP_201_CREATED)
def create_customer(payload: CustomerInput, service: CustomerService = Depends(get_customer_service)) -> CustomerRecord:
    try:
        customer = service.create_customer(payload.name, payload.contact)
    except StorehubError as exc:
        raise http_error(exc) from exc
    return customer_to_record(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: str, service: CustomerService = Depends(get_customer_service)) -> None:
    try:
        removed = service.delete_customer(customer_id)
    except StorehubError as exc:
        raise http_error(exc) from exc
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer {customer_id} not found")
