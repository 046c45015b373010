"""
Unit tests for the discharge pricing policy.

These need no database: they exercise the rate table, the
length-of-stay rule and the charge formula directly.
"""
from datetime import date
from decimal import Decimal

import pytest

from billing.services.rates import (
    BASE_FEE,
    DAILY_RATES,
    DEFAULT_DAILY_RATE,
    compute_charge,
    daily_rate_for,
    length_of_stay,
)


def test_same_day_discharge_is_one_billable_day():
    assert length_of_stay(date(2024, 3, 5), date(2024, 3, 5)) == 1


@pytest.mark.parametrize('days', [1, 2, 7, 30, 365])
def test_length_of_stay_counts_days(days):
    start = date(2024, 1, 1)
    end = date.fromordinal(start.toordinal() + days)
    assert length_of_stay(start, end) == days


def test_discharge_before_admission_is_floored_at_one_day():
    assert length_of_stay(date(2024, 1, 8), date(2024, 1, 1)) == 1


@pytest.mark.parametrize('department,rate', [
    ('Cardiology', Decimal('1500')),
    ('Neurology', Decimal('1800')),
    ('Oncology', Decimal('2000')),
    ('Emergency', Decimal('1200')),
])
def test_known_department_rates(department, rate):
    assert daily_rate_for(department) == rate
    assert compute_charge(3, daily_rate_for(department)) == BASE_FEE + 3 * rate


@pytest.mark.parametrize('department', ['Dermatology', 'Pediatrics', '', None, 'Cardio'])
def test_unknown_department_gets_default_rate(department):
    assert daily_rate_for(department) == DEFAULT_DAILY_RATE == Decimal('1000')
    assert compute_charge(2, daily_rate_for(department)) == Decimal('2500.00')


def test_department_lookup_ignores_case_and_whitespace():
    assert daily_rate_for('  cardiology ') == DAILY_RATES['Cardiology']
    assert daily_rate_for('ONCOLOGY') == Decimal('2000')


def test_charge_has_two_decimal_places():
    charge = compute_charge(7, Decimal('1500'))
    assert charge == Decimal('11000.00')
    assert charge.as_tuple().exponent == -2
