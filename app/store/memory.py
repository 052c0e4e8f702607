"""Process-local record store with the same behaviour as the SQL one."""

from datetime import date, datetime, timezone
from itertools import count
from typing import Dict, Iterable, List, Optional

from app.core.aggregation import visit_day
from app.models.customers import Customer
from app.models.staff import Staff
from app.store.base import (
    RecordStore,
    filter_by_service,
    matches_search,
    prepare_customer_data,
)


class InMemoryRecordStore(RecordStore):
    def __init__(self):
        self._customers: Dict[int, Customer] = {}
        self._staff: Dict[int, Staff] = {}
        self._customer_ids = count(1)
        self._staff_ids = count(1)

    def has_data(self) -> bool:
        return bool(self._customers)

    # Customers ------------------------------------------------------------
    def list_customers(self, search: Optional[str] = None) -> List[Customer]:
        customers = list(self._customers.values())

        if search:
            customers = [c for c in customers if matches_search(c, search)]

        return sorted(customers, key=lambda c: (c.visit_date, c.id), reverse=True)

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        return self._customers.get(customer_id)

    def create_customer(self, data: dict) -> Customer:
        now = datetime.now(timezone.utc)

        customer = Customer(
            id=next(self._customer_ids),
            created_at=now,
            updated_at=now,
            **prepare_customer_data(data, creating=True),
        )
        self._customers[customer.id] = customer

        return customer

    def update_customer(self, customer_id: int, data: dict) -> Optional[Customer]:
        customer = self._customers.get(customer_id)

        if customer is None:
            return None

        for field, value in prepare_customer_data(data, creating=False).items():
            setattr(customer, field, value)
        customer.updated_at = datetime.now(timezone.utc)

        return customer

    def delete_customer(self, customer_id: int) -> bool:
        return self._customers.pop(customer_id, None) is not None

    def delete_customers(self, customer_ids: Iterable[int]) -> int:
        return sum(1 for customer_id in set(customer_ids) if self.delete_customer(customer_id))

    def query_records(
        self,
        start: date,
        end: date,
        service_filter: Optional[str] = None,
    ) -> List[Customer]:
        records = [
            customer
            for customer in self._customers.values()
            if start <= visit_day(customer.visit_date) <= end
        ]
        records.sort(key=lambda c: c.visit_date)

        return filter_by_service(records, service_filter)

    # Staff ----------------------------------------------------------------
    def list_staff(self, active_only: bool = False) -> List[Staff]:
        staff = [s for s in self._staff.values() if s.is_active or not active_only]
        return sorted(staff, key=lambda s: s.name)

    def get_staff(self, staff_id: int) -> Optional[Staff]:
        return self._staff.get(staff_id)

    def create_staff(self, data: dict) -> Staff:
        now = datetime.now(timezone.utc)

        staff = Staff(id=next(self._staff_ids), created_at=now, updated_at=now, **data)
        self._staff[staff.id] = staff

        return staff

    def update_staff(self, staff_id: int, data: dict) -> Optional[Staff]:
        staff = self._staff.get(staff_id)

        if staff is None:
            return None

        for field, value in data.items():
            setattr(staff, field, value)
        staff.updated_at = datetime.now(timezone.utc)

        return staff

    def delete_staff(self, staff_id: int) -> bool:
        return self._staff.pop(staff_id, None) is not None
