"""Customer registry."""

from __future__ import annotations

import logging
import uuid

from ..errors import ValidationError
from ..models.domain import Customer, SystemData
from .base import DocumentService

logger = logging.getLogger(__name__)


def new_customer_id() -> str:
    return f"CUST-{uuid.uuid4().hex[:12].upper()}"


class CustomerService(DocumentService):
    def create_customer(self, name: str, contact: str | None = None) -> Customer:
        if name is None or not name.strip():
            raise ValidationError("Customer name is required")

        customer = Customer(
            id=new_customer_id(),
            name=name.strip(),
            contact=(contact or "").strip(),
            created_at=self.clock(),
        )

        def change(data: SystemData) -> Customer:
            data.customers.append(customer)
            return customer

        self.mutate(change)
        logger.info(f"Created customer {customer.id} ({customer.name})")
        return customer

    def list_customers(self) -> list[Customer]:
        return list(self.sync.fetch().customers)

    def delete_customer(self, customer_id: str) -> bool:
        # No cascade: jobs keep pointing at the removed id.
        with self.locked():
            removed = self.sync.delete_customer(customer_id)
        if removed:
            logger.info(f"Deleted customer {customer_id}")
        return removed
