# app/models/customers.py

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Integer, JSON, Numeric, String, Text
from sqlalchemy.sql import func

from app.core.amounts import final_amount
from app.database import Base


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    UPI = "UPI"
    CARD = "CARD"


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    contact = Column(String(10), nullable=False, index=True)
    email = Column(String, nullable=True)
    photo = Column(String, nullable=True)

    # Ordered service names and the set of staff names who performed them
    services = Column(JSON, nullable=False, default=list)
    performed_by = Column(JSON, nullable=False, default=list)

    amount = Column(Numeric(10, 2), nullable=False)
    discount_percent = Column(Numeric(5, 2), nullable=False, default=0)
    payment_method = Column(Enum(PaymentMethod, name="payment_method"), nullable=False)

    visit_date = Column(DateTime, nullable=False, default=datetime.now, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_customer_amount_non_negative"),
        CheckConstraint(
            "discount_percent >= 0 AND discount_percent <= 100",
            name="ck_customer_discount_range",
        ),
    )

    @property
    def final_amount(self):
        return final_amount(self.amount, self.discount_percent)
