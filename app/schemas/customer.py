# schemas/customer.py

from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from app.core.tabular import LIST_SEPARATOR
from app.models.customers import PaymentMethod


def _check_separator(names, label):
    # Exported list cells are joined on the separator and split on it again
    for name in names:
        if LIST_SEPARATOR in name:
            raise ValueError(f"{label} names cannot contain '{LIST_SEPARATOR}': {name!r}")
    return names


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1)
    contact: str = Field(..., pattern=r"^[0-9]{10}$", description="Exactly 10 digits")
    email: Optional[EmailStr] = None
    photo: Optional[str] = None

    services: List[str] = Field(..., min_length=1)
    performed_by: List[str] = Field(default_factory=list)

    amount: Decimal = Field(..., ge=0, lt=100_000_000)
    discount_percent: Decimal = Field(Decimal("0"), ge=0, le=100)
    payment_method: PaymentMethod

    visit_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("name", "contact", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", "photo", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("services")
    @classmethod
    def clean_services(cls, value):
        services = [service.strip() for service in value if service and service.strip()]
        if not services:
            raise ValueError("Services must be a non-empty list")
        return _check_separator(services, "Service")

    @field_validator("performed_by")
    @classmethod
    def unique_staff_names(cls, value):
        names = []
        for name in value:
            name = name.strip()
            if name and name not in names:
                names.append(name)
        return _check_separator(names, "Staff")

    @field_validator("payment_method", mode="before")
    @classmethod
    def upper_payment_method(cls, value):
        return value.strip().upper() if isinstance(value, str) else value


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CustomerBase):
    # Full overwrite; visit_date is kept when omitted
    pass


class CustomerResponse(BaseModel):
    id: int
    name: str
    contact: str
    email: Optional[str]
    photo: Optional[str]
    services: List[str]
    performed_by: List[str]
    amount: Decimal
    discount_percent: Decimal
    final_amount: Decimal
    payment_method: PaymentMethod
    visit_date: datetime
    notes: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BulkDeleteRequest(BaseModel):
    ids: List[int] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    deleted: int
