# app/core/amounts.py

from decimal import Decimal

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def final_amount(amount, discount_percent) -> Decimal:
    """Charge after a percentage discount, rounded to cents."""
    amount = to_decimal(amount)
    discount_percent = to_decimal(discount_percent)

    discount_amount = amount * discount_percent / 100

    return (amount - discount_amount).quantize(CENT)
