"""
Discharge billing.

Turns a discharged admission into exactly one bill.  The whole unit of
work (lookup, uniqueness check, insert) runs in one transaction so
either the bill is created or nothing is written.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from billing.exceptions import BillingError, Conflict, InvalidState, NotFound
from billing.models import Bill
from billing.services.rates import compute_charge, daily_rate_for, length_of_stay
from billing.services.store import BillingStore, DjangoBillingStore

logger = logging.getLogger(__name__)

INITIAL_STATUS = Bill.STATUS_UNPAID
INITIAL_INSURANCE_PROVIDER = 'Pending Insurance'


def generate_discharge_bill(admission_id: int, *, store: Optional[BillingStore] = None) -> Bill:
    """Compute and persist the bill for a discharged admission.

    Raises :class:`NotFound` when the admission or its doctor is
    missing, :class:`InvalidState` when the admission has no discharge
    date and :class:`Conflict` when the admission was already billed.
    Store errors surface as :class:`StoreFailure`.
    """
    store = store or DjangoBillingStore()
    try:
        with transaction.atomic():
            admission = store.get_admission(admission_id, for_update=True)
            if admission is None:
                raise NotFound(f'admission {admission_id} not found')
            if admission.discharge_date is None:
                raise InvalidState(f'admission {admission_id} has not been discharged')

            days_stayed = length_of_stay(admission.admission_date, admission.discharge_date)

            doctor = store.get_doctor(admission.doctor_id)
            if doctor is None:
                raise NotFound(f'doctor {admission.doctor_id} for admission {admission_id} not found')

            amount = compute_charge(days_stayed, daily_rate_for(doctor.department))

            if store.get_bill_by_admission(admission.pk) is not None:
                raise Conflict(f'bill already exists for admission {admission_id}')

            bill = store.insert_bill(admission.pk, amount, INITIAL_STATUS, INITIAL_INSURANCE_PROVIDER)
    except BillingError as exc:
        logger.warning('discharge bill rejected for admission %s: %s', admission_id, exc)
        raise

    logger.info('bill %s created for admission %s: %s days in %s, amount %s',
                bill.pk, admission_id, days_stayed, doctor.department, amount)
    return bill


def confirmation_message(bill: Bill) -> str:
    return f"Bill generated for Admission {bill.admission_id}: ${bill.amount:.2f}"
