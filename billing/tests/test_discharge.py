"""
Tests for the discharge billing service.

They run against the test database through the default Django store,
except where a hand-built store is injected to reach states the
schema itself forbids (a dangling doctor reference, a lost race).
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest import mock

import pytest
from django.db import OperationalError

from billing.exceptions import Conflict, InvalidState, NotFound, StoreFailure
from billing.models import Admission, Bill, Doctor, Patient
from billing.services.discharge import confirmation_message, generate_discharge_bill
from billing.services.store import DjangoBillingStore

pytestmark = pytest.mark.django_db


def make_admission(department='Cardiology', admitted=date(2024, 1, 1), discharged=date(2024, 1, 8)):
    patient = Patient.objects.create(name='Jane Roe', date_of_birth=date(1980, 5, 17), gender='F', blood_type='O+')
    doctor = Doctor.objects.create(name='Dr. Who', department=department)
    return Admission.objects.create(
        patient=patient, doctor=doctor,
        admission_date=admitted, discharge_date=discharged, reason='Observation',
    )


def test_week_long_cardiology_stay():
    admission = make_admission()
    bill = generate_discharge_bill(admission.id)

    bill.refresh_from_db()
    assert bill.admission_id == admission.id
    assert bill.amount == Decimal('11000.00')
    assert bill.status == 'Unpaid'
    assert bill.insurance_provider == 'Pending Insurance'
    assert confirmation_message(bill) == f'Bill generated for Admission {admission.id}: $11000.00'


def test_same_day_emergency_discharge_bills_one_day():
    admission = make_admission(department='Emergency', admitted=date(2024, 2, 1), discharged=date(2024, 2, 1))
    bill = generate_discharge_bill(admission.id)
    bill.refresh_from_db()
    assert bill.amount == Decimal('1700.00')


def test_unknown_department_uses_default_rate():
    admission = make_admission(department='Dermatology', admitted=date(2024, 1, 1), discharged=date(2024, 1, 4))
    bill = generate_discharge_bill(admission.id)
    bill.refresh_from_db()
    assert bill.amount == Decimal('3500.00')


def test_second_call_conflicts_and_keeps_single_bill():
    admission = make_admission()
    first = generate_discharge_bill(admission.id)
    assert first.status == Bill.STATUS_UNPAID

    with pytest.raises(Conflict):
        generate_discharge_bill(admission.id)
    assert Bill.objects.filter(admission=admission).count() == 1


def test_missing_admission_is_not_found_and_writes_nothing():
    with pytest.raises(NotFound):
        generate_discharge_bill(999999)
    assert Bill.objects.count() == 0


def test_undischarged_admission_is_invalid_state():
    admission = make_admission(discharged=None)
    with pytest.raises(InvalidState):
        generate_discharge_bill(admission.id)
    assert Bill.objects.count() == 0


class DanglingDoctorStore(DjangoBillingStore):
    def get_doctor(self, doctor_id):
        return None


def test_missing_doctor_is_not_found():
    admission = make_admission()
    with pytest.raises(NotFound):
        generate_discharge_bill(admission.id, store=DanglingDoctorStore())
    assert Bill.objects.count() == 0


class BlindStore(DjangoBillingStore):
    """Never sees existing bills, like a caller that lost a race."""

    def get_bill_by_admission(self, admission_id):
        return None


def test_unique_violation_on_insert_is_conflict():
    admission = make_admission()
    generate_discharge_bill(admission.id)

    with pytest.raises(Conflict):
        generate_discharge_bill(admission.id, store=BlindStore())
    assert Bill.objects.filter(admission=admission).count() == 1


def test_database_failure_on_insert_is_store_failure():
    admission = make_admission()
    with mock.patch.object(Bill.objects, 'create', side_effect=OperationalError('database is locked')):
        with pytest.raises(StoreFailure):
            generate_discharge_bill(admission.id)
    assert Bill.objects.count() == 0


class InMemoryStore:
    def __init__(self, admissions, doctors):
        self.admissions = admissions
        self.doctors = doctors
        self.bills = {}

    def get_admission(self, admission_id, *, for_update=False):
        return self.admissions.get(admission_id)

    def get_doctor(self, doctor_id):
        return self.doctors.get(doctor_id)

    def get_bill_by_admission(self, admission_id):
        return self.bills.get(admission_id)

    def insert_bill(self, admission_id, amount, status, insurance_provider):
        bill = Bill(id=len(self.bills) + 1, admission_id=admission_id, amount=amount,
                    status=status, insurance_provider=insurance_provider)
        self.bills[admission_id] = bill
        return bill


def test_injected_store_receives_the_computed_bill():
    doctor = SimpleNamespace(id=3, department='Neurology')
    admission = SimpleNamespace(pk=10, id=10, doctor_id=3,
                                admission_date=date(2024, 6, 1), discharge_date=date(2024, 6, 3))
    store = InMemoryStore({10: admission}, {3: doctor})

    bill = generate_discharge_bill(10, store=store)

    assert bill.amount == Decimal('4100.00')
    assert store.bills == {10: bill}
    assert Bill.objects.count() == 0
