"""
Discharge pricing policy.

A bill is a fixed base fee plus a per-day charge that depends on the
attending doctor's department.  The table below is the whole policy;
departments missing from it are charged :data:`DEFAULT_DAILY_RATE`.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from billing.models import Department

CENTS = Decimal('0.01')

BASE_FEE = Decimal('500')
DEFAULT_DAILY_RATE = Decimal('1000')

DAILY_RATES: dict[str, Decimal] = {
    Department.CARDIOLOGY.value: Decimal('1500'),
    Department.NEUROLOGY.value: Decimal('1800'),
    Department.ONCOLOGY.value: Decimal('2000'),
    Department.EMERGENCY.value: Decimal('1200'),
}

_RATES_BY_KEY = {name.casefold(): rate for name, rate in DAILY_RATES.items()}


def daily_rate_for(department: Optional[str]) -> Decimal:
    """Return the per-day rate for ``department``.

    Matching ignores case and surrounding whitespace.  Never fails:
    unknown, blank or missing departments get the default rate.
    """
    key = (department or '').strip().casefold()
    return _RATES_BY_KEY.get(key, DEFAULT_DAILY_RATE)


def length_of_stay(admission_date: date, discharge_date: date) -> int:
    """Billable days between admission and discharge, at least one."""
    return max((discharge_date - admission_date).days, 1)


def compute_charge(days_stayed: int, daily_rate: Decimal) -> Decimal:
    return (BASE_FEE + days_stayed * daily_rate).quantize(CENTS, rounding=ROUND_HALF_UP)
