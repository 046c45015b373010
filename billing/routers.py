"""
URL mappings for the hospital billing API.

Trailing slashes are deliberately omitted, matching the rest of the
hospital API (``APPEND_SLASH`` is off).
"""
from django.urls import path

from .auth_views import login_view
from .views import bills

urlpatterns = [
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    # Discharge billing
    path('api/admissions/<int:admission_id>/discharge-bill', bills.discharge_bill, name='discharge_bill'),
    path('api/admissions/<int:admission_id>/bill', bills.admission_bill, name='admission_bill'),
    path('api/bills', bills.bills, name='bills'),
]
