"""
Django admin registrations for the billing models.

Reference data (patients, doctors, admissions) is editable here.  Bills
are read-only: they are created by the discharge billing service and
their status is managed by the payments workflow.
"""

from django.contrib import admin

from .models import Admission, Bill, Doctor, Patient, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'is_staff', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('username', 'first_name', 'last_name')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'date_of_birth', 'gender', 'blood_type')
    search_fields = ('name',)


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'department')
    list_filter = ('department',)
    search_fields = ('name',)


@admin.register(Admission)
class AdmissionAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'admission_date', 'discharge_date', 'reason')
    list_filter = ('doctor__department',)
    search_fields = ('patient__name', 'doctor__name', 'reason')


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ('id', 'admission', 'amount', 'status', 'insurance_provider', 'created_at')
    list_filter = ('status',)
    readonly_fields = ('admission', 'amount', 'status', 'insurance_provider', 'created_at')

    def has_add_permission(self, request):
        return False
