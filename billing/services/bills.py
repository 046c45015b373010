from typing import Optional
from billing.models import Bill


def list_bills(*, status: Optional[str]=None, page: Optional[int]=None,
               page_size: Optional[int]=None) -> tuple[list[dict], int]:
    qs = Bill.objects.select_related('admission__patient', 'admission__doctor')
    if status:
        qs = qs.filter(status=status)
    qs = qs.order_by('-id')

    total = qs.count()
    if page and page_size:
        start = (page-1)*page_size
        end = start + page_size
        qs = qs[start:end]
    return [format_bill(b) for b in qs], total


def format_bill(bill: Bill) -> dict:
    admission = bill.admission
    return {
        'id': bill.id,
        'admissionId': bill.admission_id,
        'patientName': admission.patient.name,
        'doctorName': admission.doctor.name,
        'department': admission.doctor.department,
        'amount': f'{bill.amount:.2f}',
        'status': bill.status,
        'insuranceProvider': bill.insurance_provider,
        'createdAt': bill.created_at.isoformat() if bill.created_at else None,
    }
