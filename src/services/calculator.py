"""
Line-item amounts and project totals.

Amounts are kept unrounded; rounding to two decimals happens only in the
format_* helpers used at display time.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable

from models.projects import Employee


@dataclass(frozen=True)
class LineItem:
    """One computed employee row."""

    index: int  # 1-based position in the project
    employee_id: str
    name: str
    rate_per_hour: float
    hours: float
    amount: float


def to_number(value: Any) -> float:
    """Coerce a rate or hours value to a finite non-negative float (else 0)."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def line_amount(rate_per_hour: Any, hours: Any) -> float:
    return to_number(rate_per_hour) * to_number(hours)


def calculate_line_items(employees: Iterable[Employee]) -> list[LineItem]:
    """Recompute every row from its current rate and hours."""
    items = []
    for index, employee in enumerate(employees, start=1):
        rate = to_number(employee.rate_per_hour)
        hours = to_number(employee.hours)
        items.append(
            LineItem(
                index=index,
                employee_id=employee.id,
                name=employee.name,
                rate_per_hour=rate,
                hours=hours,
                amount=rate * hours,
            )
        )
    return items


def grand_total(employees: Iterable[Employee]) -> float:
    """Sum of rate x hours. Stored employee totals are ignored."""
    return sum(line_amount(e.rate_per_hour, e.hours) for e in employees)


# =============================================================================
# DISPLAY FORMATTING
# =============================================================================


def format_amount(amount: float) -> str:
    return f"{amount:.2f}"


def format_money(amount: float, currency: str) -> str:
    """Format as '<CUR> 1234.50' (currency code, never a symbol)."""
    return f"{currency} {format_amount(amount)}"


def format_rate(rate_per_hour: float) -> str:
    return format_amount(rate_per_hour)


def format_hours(hours: float) -> str:
    """Whole hours print without decimals ('160'), fractions as-is ('7.5')."""
    if float(hours).is_integer():
        return str(int(hours))
    return f"{hours:.10g}"
