"""Record store interface shared by the SQL and in-memory backends."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Iterable, List, Optional

from app.core.aggregation import normalize_service_filter
from app.models.customers import Customer
from app.models.staff import Staff


class RecordStore(ABC):
    """Customer visit records and staff records behind one API."""

    # Health ---------------------------------------------------------------
    @abstractmethod
    def has_data(self) -> bool:
        """Probe the backend; raises StoreUnavailableError when it is down."""
        raise NotImplementedError

    # Customers ------------------------------------------------------------
    @abstractmethod
    def list_customers(self, search: Optional[str] = None) -> List[Customer]:
        raise NotImplementedError

    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        raise NotImplementedError

    @abstractmethod
    def create_customer(self, data: dict) -> Customer:
        raise NotImplementedError

    @abstractmethod
    def update_customer(self, customer_id: int, data: dict) -> Optional[Customer]:
        raise NotImplementedError

    @abstractmethod
    def delete_customer(self, customer_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def delete_customers(self, customer_ids: Iterable[int]) -> int:
        raise NotImplementedError

    @abstractmethod
    def query_records(
        self,
        start: date,
        end: date,
        service_filter: Optional[str] = None,
    ) -> List[Customer]:
        """Visits whose visit_date falls on a day in ``[start, end]``, oldest first."""
        raise NotImplementedError

    # Staff ----------------------------------------------------------------
    @abstractmethod
    def list_staff(self, active_only: bool = False) -> List[Staff]:
        raise NotImplementedError

    @abstractmethod
    def get_staff(self, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    @abstractmethod
    def create_staff(self, data: dict) -> Staff:
        raise NotImplementedError

    @abstractmethod
    def update_staff(self, staff_id: int, data: dict) -> Optional[Staff]:
        raise NotImplementedError

    @abstractmethod
    def delete_staff(self, staff_id: int) -> bool:
        raise NotImplementedError


def prepare_customer_data(data: dict, creating: bool) -> dict:
    data = dict(data)
    visit_date = data.get("visit_date")

    if visit_date is None:
        if creating:
            data["visit_date"] = datetime.now()
        else:
            data.pop("visit_date", None)

    # Stored as naive local time
    elif visit_date.tzinfo is not None:
        data["visit_date"] = visit_date.astimezone().replace(tzinfo=None)

    return data


def filter_by_service(records: List[Customer], service_filter: Optional[str]) -> List[Customer]:
    service_filter = normalize_service_filter(service_filter)
    if not service_filter:
        return list(records)
    return [record for record in records if service_filter in (record.services or [])]


def matches_search(customer: Customer, search: str) -> bool:
    term = search.lower()
    return (
        term in customer.name.lower()
        or search in customer.contact
        or bool(customer.email and term in customer.email.lower())
    )
