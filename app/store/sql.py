"""SQLAlchemy-backed record store."""

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreUnavailableError
from app.models.customers import Customer
from app.models.staff import Staff
from app.store.base import RecordStore, filter_by_service, prepare_customer_data

logger = logging.getLogger("app.store")


class SqlRecordStore(RecordStore):
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Store failure while trying to {action}: {exc}")
            raise StoreUnavailableError(f"Unable to {action}") from exc

    def has_data(self) -> bool:
        with self._guard("reach the database"):
            return self.db.query(Customer.id).first() is not None

    # =========================================================
    # CUSTOMERS
    # =========================================================
    def list_customers(self, search: Optional[str] = None) -> List[Customer]:
        with self._guard("list customers"):
            query = self.db.query(Customer)

            if search:
                query = query.filter(
                    or_(
                        Customer.name.ilike(f"%{search}%"),
                        Customer.contact.contains(search),
                        Customer.email.ilike(f"%{search}%"),
                    )
                )

            return query.order_by(Customer.visit_date.desc(), Customer.id.desc()).all()

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        with self._guard("load customer"):
            return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def create_customer(self, data: dict) -> Customer:
        customer = Customer(**prepare_customer_data(data, creating=True))

        with self._guard("create customer"):
            self.db.add(customer)
            self.db.commit()
            self.db.refresh(customer)

        return customer

    def update_customer(self, customer_id: int, data: dict) -> Optional[Customer]:
        customer = self.get_customer(customer_id)

        if customer is None:
            return None

        with self._guard("update customer"):
            for field, value in prepare_customer_data(data, creating=False).items():
                setattr(customer, field, value)

            self.db.commit()
            self.db.refresh(customer)

        return customer

    def delete_customer(self, customer_id: int) -> bool:
        customer = self.get_customer(customer_id)

        if customer is None:
            return False

        with self._guard("delete customer"):
            self.db.delete(customer)
            self.db.commit()

        return True

    def delete_customers(self, customer_ids: Iterable[int]) -> int:
        with self._guard("delete customers"):
            deleted = (
                self.db.query(Customer)
                .filter(Customer.id.in_(list(customer_ids)))
                .delete(synchronize_session=False)
            )
            self.db.commit()

        return deleted

    def query_records(
        self,
        start: date,
        end: date,
        service_filter: Optional[str] = None,
    ) -> List[Customer]:
        start_dt = datetime.combine(start, datetime.min.time())
        end_dt = datetime.combine(end, datetime.max.time())

        with self._guard("query visit records"):
            records = (
                self.db.query(Customer)
                .filter(Customer.visit_date.between(start_dt, end_dt))
                .order_by(Customer.visit_date.asc())
                .all()
            )

        # services is a JSON list, so membership is checked here
        return filter_by_service(records, service_filter)

    # =========================================================
    # STAFF
    # =========================================================
    def list_staff(self, active_only: bool = False) -> List[Staff]:
        with self._guard("list staff"):
            query = self.db.query(Staff)

            if active_only:
                query = query.filter(Staff.is_active.is_(True))

            return query.order_by(Staff.name.asc()).all()

    def get_staff(self, staff_id: int) -> Optional[Staff]:
        with self._guard("load staff member"):
            return self.db.query(Staff).filter(Staff.id == staff_id).first()

    def create_staff(self, data: dict) -> Staff:
        staff = Staff(**data)

        with self._guard("create staff member"):
            self.db.add(staff)
            self.db.commit()
            self.db.refresh(staff)

        return staff

    def update_staff(self, staff_id: int, data: dict) -> Optional[Staff]:
        staff = self.get_staff(staff_id)

        if staff is None:
            return None

        with self._guard("update staff member"):
            for field, value in data.items():
                setattr(staff, field, value)

            self.db.commit()
            self.db.refresh(staff)

        return staff

    def delete_staff(self, staff_id: int) -> bool:
        staff = self.get_staff(staff_id)

        if staff is None:
            return False

        with self._guard("delete staff member"):
            self.db.delete(staff)
            self.db.commit()

        return True
