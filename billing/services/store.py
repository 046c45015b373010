"""
Data store access for the discharge billing workflow.

The calculator talks to a :class:`BillingStore` handed to it by the
caller instead of reaching for the ORM directly.  :class:`DjangoBillingStore`
is the production implementation; database errors are translated into
the billing error taxonomy here so that callers never see driver
exceptions.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol

from django.db import DatabaseError, IntegrityError, transaction

from billing.exceptions import Conflict, StoreFailure
from billing.models import Admission, Bill, Doctor


class BillingStore(Protocol):
    def get_admission(self, admission_id: int, *, for_update: bool = False) -> Optional[Admission]: ...

    def get_doctor(self, doctor_id: int) -> Optional[Doctor]: ...

    def get_bill_by_admission(self, admission_id: int) -> Optional[Bill]: ...

    def insert_bill(self, admission_id: int, amount: Decimal, status: str,
                    insurance_provider: Optional[str]) -> Bill: ...


class DjangoBillingStore:
    """:class:`BillingStore` backed by the default database."""

    def get_admission(self, admission_id: int, *, for_update: bool = False) -> Optional[Admission]:
        qs = Admission.objects.all()
        if for_update:
            # Serializes concurrent discharge billing of the same admission.
            qs = qs.select_for_update()
        try:
            return qs.filter(pk=admission_id).first()
        except DatabaseError as exc:
            raise StoreFailure(f'failed to read admission {admission_id}') from exc

    def get_doctor(self, doctor_id: int) -> Optional[Doctor]:
        try:
            return Doctor.objects.filter(pk=doctor_id).first()
        except DatabaseError as exc:
            raise StoreFailure(f'failed to read doctor {doctor_id}') from exc

    def get_bill_by_admission(self, admission_id: int) -> Optional[Bill]:
        try:
            return Bill.objects.filter(admission_id=admission_id).first()
        except DatabaseError as exc:
            raise StoreFailure(f'failed to read bill for admission {admission_id}') from exc

    def insert_bill(self, admission_id: int, amount: Decimal, status: str,
                    insurance_provider: Optional[str]) -> Bill:
        try:
            # Savepoint so a unique violation leaves the outer transaction usable.
            with transaction.atomic():
                return Bill.objects.create(
                    admission_id=admission_id,
                    amount=amount,
                    status=status,
                    insurance_provider=insurance_provider,
                )
        except IntegrityError as exc:
            if Bill.objects.filter(admission_id=admission_id).exists():
                raise Conflict(f'bill already exists for admission {admission_id}') from exc
            raise StoreFailure(f'constraint violated writing bill for admission {admission_id}') from exc
        except DatabaseError as exc:
            raise StoreFailure(f'failed to write bill for admission {admission_id}') from exc
