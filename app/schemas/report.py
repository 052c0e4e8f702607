# schemas/report.py

from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List, Optional



class ServiceBreakdownItem(BaseModel):
    service: str
    count: int
    amount: Decimal


class StaffBreakdownItem(BaseModel):
    staff: str
    count: int
    amount: Decimal


class PaymentBreakdownItem(BaseModel):
    payment_method: str
    count: int
    amount: Decimal


class DailySeriesItem(BaseModel):
    date: date
    amount: Decimal
    count: int


class ReportResponse(BaseModel):
    start_date: date
    end_date: date
    period: str
    service_filter: Optional[str] = None
    attribution: str

    total_amount: Decimal
    total_discounted_amount: Decimal
    total_count: int
    average_amount: Decimal

    service_breakdown: List[ServiceBreakdownItem]
    staff_breakdown: List[StaffBreakdownItem]
    payment_breakdown: List[PaymentBreakdownItem]
    daily_series: List[DailySeriesItem]


class DateRangeResponse(BaseModel):
    preset: str
    start_date: date
    end_date: date
