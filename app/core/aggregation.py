# =========================================================
# REVENUE AGGREGATION ENGINE
#
# Turns a set of visit records into the dashboard report:
# - Totals (raw amount, discounted amount, count, average)
# - Service / staff / payment method breakdowns
# - One series entry per calendar day of the range
#
# Pure: reads the records it is given, touches nothing else.
# =========================================================

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from app.core.amounts import CENT, final_amount, to_decimal
from app.core.errors import InvalidRangeError, ValidationError
from app.schemas.report import (
    DailySeriesItem,
    PaymentBreakdownItem,
    ReportResponse,
    ServiceBreakdownItem,
    StaffBreakdownItem,
)

PERIODS = ("daily", "weekly", "monthly")
ATTRIBUTIONS = ("full", "split")


# =========================================================
# INPUT PARSING
# =========================================================
def parse_report_date(value, label: str = "date") -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidRangeError(f"{label} is required")

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidRangeError(f"{label} must be a YYYY-MM-DD date, got {value!r}")


def validate_report_options(period: str, attribution: str):
    if period not in PERIODS:
        raise ValidationError(f"period must be one of {', '.join(PERIODS)}")

    if attribution not in ATTRIBUTIONS:
        raise ValidationError(f"attribution must be one of {', '.join(ATTRIBUTIONS)}")


def normalize_service_filter(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None

    value = value.strip()

    if not value or value.lower() == "all":
        return None

    return value


def visit_day(visit_date: datetime) -> date:
    # Aware timestamps are bucketed by the server's local calendar day
    if visit_date.tzinfo is not None:
        visit_date = visit_date.astimezone()
    return visit_date.date()


def _distinct(values) -> list:
    seen = []
    for value in values or []:
        if value not in seen:
            seen.append(value)
    return seen


def _accumulate(buckets: dict, keys: list, share: Decimal):
    for key in keys:
        count, amount = buckets.get(key, (0, Decimal("0")))
        buckets[key] = (count + 1, amount + share)


def _ranked(buckets: dict):
    # sorted() keeps encounter order for equal amounts, reverse included
    return sorted(buckets.items(), key=lambda item: item[1][1], reverse=True)


# =========================================================
# CORE REPORT CALCULATION
# =========================================================
def compute_report(
    records: Iterable,
    start,
    end,
    service_filter: Optional[str] = None,
    period: str = "daily",
    attribution: str = "full",
) -> ReportResponse:
    """Aggregate visit records over the inclusive range ``[start, end]``.

    ``records`` may hold anything exposing ``visit_date``, ``amount``,
    ``discount_percent``, ``services``, ``performed_by`` and
    ``payment_method``; records outside the range, or without the filtered
    service, are ignored.

    With ``attribution="full"`` a record carrying several services (or staff)
    adds its whole amount to each of their buckets, so breakdown sums can
    exceed ``total_amount``. ``"split"`` shares the amount evenly instead.
    """
    start_date = parse_report_date(start, "start_date")
    end_date = parse_report_date(end, "end_date")
    validate_report_options(period, attribution)

    service_filter = normalize_service_filter(service_filter)
    split = attribution == "split"

    total_amount = Decimal("0")
    total_discounted_amount = Decimal("0")
    total_count = 0

    service_map = {}
    staff_map = {}
    payment_map = {}
    day_map = {}

    for record in records:
        day = visit_day(record.visit_date)

        if not start_date <= day <= end_date:
            continue

        services = _distinct(record.services)

        if service_filter and service_filter not in services:
            continue

        amount = to_decimal(record.amount)

        total_amount += amount
        total_discounted_amount += final_amount(amount, record.discount_percent)
        total_count += 1

        # ----------------------------
        # Services
        # ----------------------------
        share = amount / len(services) if split and services else amount
        if service_filter:
            services = [service_filter]
        _accumulate(service_map, services, share)

        # ----------------------------
        # Staff
        # ----------------------------
        staff = _distinct(record.performed_by)
        share = amount / len(staff) if split and staff else amount
        _accumulate(staff_map, staff, share)

        # ----------------------------
        # Payment method
        # ----------------------------
        method = getattr(record.payment_method, "value", record.payment_method)
        _accumulate(payment_map, [method], amount)

        day_count, day_amount = day_map.get(day, (0, Decimal("0")))
        day_map[day] = (day_count + 1, day_amount + amount)

    if total_count == 0:
        average_amount = Decimal("0")
    else:
        average_amount = total_amount / total_count

    return ReportResponse(
        start_date=start_date,
        end_date=end_date,
        period=period,
        service_filter=service_filter,
        attribution=attribution,
        total_amount=total_amount.quantize(CENT),
        total_discounted_amount=total_discounted_amount.quantize(CENT),
        total_count=total_count,
        average_amount=average_amount,
        service_breakdown=[
            ServiceBreakdownItem(service=key, count=count, amount=amount.quantize(CENT))
            for key, (count, amount) in _ranked(service_map)
        ],
        staff_breakdown=[
            StaffBreakdownItem(staff=key, count=count, amount=amount.quantize(CENT))
            for key, (count, amount) in _ranked(staff_map)
        ],
        payment_breakdown=[
            PaymentBreakdownItem(payment_method=key, count=count, amount=amount.quantize(CENT))
            for key, (count, amount) in _ranked(payment_map)
        ],
        daily_series=_daily_series(day_map, start_date, end_date),
    )


# =========================================================
# DAILY SERIES
# =========================================================
def _daily_series(day_map: dict, start_date: date, end_date: date):
    if start_date > end_date:
        return []

    # A single-day range is one entry whatever the period
    if start_date == end_date:
        days = [start_date]
    else:
        days = [
            start_date + timedelta(days=offset)
            for offset in range((end_date - start_date).days + 1)
        ]

    series = []
    for day in days:
        count, amount = day_map.get(day, (0, Decimal("0")))
        series.append(
            DailySeriesItem(date=day, amount=amount.quantize(CENT), count=count)
        )

    return series
