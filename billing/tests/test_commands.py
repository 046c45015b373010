from datetime import date
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.urls import reverse
from rest_framework.test import APIClient

from billing.models import Admission, Bill, Doctor, Patient, User

pytestmark = pytest.mark.django_db


def test_generate_discharge_bill_prints_confirmation():
    patient = Patient.objects.create(name='Maria Lopez')
    doctor = Doctor.objects.create(name='Dr. Dan Rapid', department='Emergency')
    admission = Admission.objects.create(patient=patient, doctor=doctor,
                                         admission_date=date(2024, 5, 4), discharge_date=date(2024, 5, 4))
    out = StringIO()
    call_command('generate_discharge_bill', str(admission.id), stdout=out)
    assert f'Bill generated for Admission {admission.id}: $1700.00' in out.getvalue()
    assert Bill.objects.get(admission=admission).amount == Decimal('1700.00')


def test_generate_discharge_bill_reports_missing_admission():
    with pytest.raises(CommandError) as excinfo:
        call_command('generate_discharge_bill', '31337', stdout=StringIO())
    assert 'not_found' in str(excinfo.value)


def test_populate_data_creates_billable_admissions():
    call_command('populate_data', '--admissions', '12', stdout=StringIO())
    assert Doctor.objects.count() == 7
    assert Patient.objects.count() == 10
    assert Admission.objects.count() == 12
    # running again does not duplicate reference data
    call_command('populate_data', '--admissions', '0', stdout=StringIO())
    assert Doctor.objects.count() == 7


def test_ensure_test_users_then_login():
    call_command('ensure_test_users', stdout=StringIO())
    clerk = User.objects.get(username='clerk1')
    assert clerk.role == 'clerk'

    client = APIClient()
    r = client.post(reverse('login_view'), {'username': 'clerk1', 'password': 'billing-dev-123'}, format='json')
    assert r.status_code == 200
    assert r.data['token']
    assert r.data['user']['role'] == 'clerk'

    client.credentials(HTTP_AUTHORIZATION=f"Token {r.data['token']}")
    assert client.get('/api/bills').status_code == 200


def test_login_rejects_bad_password():
    User.objects.create_user(username='clerk2', password='right-pass-1', role='clerk')
    r = APIClient().post(reverse('login_view'), {'username': 'clerk2', 'password': 'wrong'}, format='json')
    assert r.status_code == 400
    assert r.data['ok'] is False
