"""
Database models for the hospital billing backend.

These models capture the operational records the discharge billing
workflow reads from (patients, doctors, admissions) and the single
record it writes (bills).  Bills are created by
:mod:`billing.services.discharge` only; every other table is maintained
by the admin site, the seeding commands or an external import job.
"""
from __future__ import annotations

from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q


class Department(models.TextChoices):
    """Known hospital departments.

    The set is open: :class:`Doctor` stores the department as plain text
    so that new departments can be recorded before they get a rate of
    their own.
    """
    CARDIOLOGY = 'Cardiology', 'Cardiology'
    NEUROLOGY = 'Neurology', 'Neurology'
    ONCOLOGY = 'Oncology', 'Oncology'
    EMERGENCY = 'Emergency', 'Emergency'
    PEDIATRICS = 'Pediatrics', 'Pediatrics'
    ORTHOPEDICS = 'Orthopedics', 'Orthopedics'
    GENERAL_MEDICINE = 'General Medicine', 'General Medicine'


class User(AbstractUser):
    """Staff account with a billing role.

    ``clerk`` users generate and read bills; ``admin`` users may also
    manage reference data through the Django admin.
    """
    ROLE_CHOICES = [
        ('clerk', 'Billing Clerk'),
        ('admin', 'Administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='clerk')

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Patient(models.Model):
    GENDER_CHOICES = [
        ('M', 'Male'),
        ('F', 'Female'),
        ('O', 'Other'),
    ]
    BLOOD_TYPE_CHOICES = [
        (t, t) for t in ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-')
    ]

    name = models.CharField(max_length=100)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=1, choices=GENDER_CHOICES, blank=True)
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES, blank=True)

    def __str__(self) -> str:
        return f"{self.name} (#{self.pk})"


class Doctor(models.Model):
    name = models.CharField(max_length=100)
    # No choices enforcement: unknown departments fall back to the default rate.
    department = models.CharField(max_length=50, db_index=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.department})"


class Admission(models.Model):
    """A hospital stay linking one patient to the attending doctor.

    ``discharge_date`` stays empty while the patient is in hospital; an
    admission only becomes billable once it is set.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='admissions')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='admissions')
    admission_date = models.DateField()
    discharge_date = models.DateField(null=True, blank=True)
    reason = models.CharField(max_length=255, blank=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=Q(discharge_date__isnull=True) | Q(discharge_date__gte=F('admission_date')),
                name='admission_discharge_after_admission',
            ),
        ]

    def __str__(self) -> str:
        return f"Admission #{self.pk} for {self.patient}"

    @property
    def is_discharged(self) -> bool:
        return self.discharge_date is not None


class Bill(models.Model):
    """Charge raised for one admission at discharge time.

    The one-to-one relation gives the database-level guarantee that an
    admission is never billed twice.
    """
    STATUS_UNPAID = 'Unpaid'
    STATUS_PAID = 'Paid'
    STATUS_PENDING = 'Pending'
    STATUS_CHOICES = [
        (STATUS_UNPAID, 'Unpaid'),
        (STATUS_PAID, 'Paid'),
        (STATUS_PENDING, 'Pending'),
    ]

    admission = models.OneToOneField(Admission, on_delete=models.CASCADE, related_name='bill')
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_UNPAID, db_index=True)
    insurance_provider = models.CharField(max_length=100, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=Q(amount__gte=0), name='bill_amount_non_negative'),
        ]

    def __str__(self) -> str:
        return f"Bill #{self.pk} ({self.status}) for Admission #{self.admission_id}"
