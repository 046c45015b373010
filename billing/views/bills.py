"""
Billing endpoints.

Billing staff trigger discharge billing for an admission and read the
resulting bills.  Failures raised by the billing services propagate to
:func:`billing.exceptions.api_exception_handler`, which renders them in
the unified error envelope.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from billing.exceptions import NotFound
from billing.models import Bill
from billing.permissions import IsBillingRole
from billing.serializers.bill import BillListQuerySerializer
from billing.services.bills import format_bill, list_bills
from billing.services.discharge import confirmation_message, generate_discharge_bill


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsBillingRole])
def discharge_bill(request, admission_id: int):
    """Generate the bill for a discharged admission.

    Returns 201 with the created bill and the confirmation line.  A
    second call for the same admission is rejected with 409.
    """
    bill = generate_discharge_bill(admission_id)
    bill = Bill.objects.select_related('admission__patient', 'admission__doctor').get(pk=bill.pk)
    return Response(
        {'ok': True, 'message': confirmation_message(bill), 'data': format_bill(bill)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsBillingRole])
def admission_bill(request, admission_id: int):
    bill = (
        Bill.objects.select_related('admission__patient', 'admission__doctor')
        .filter(admission_id=admission_id)
        .first()
    )
    if not bill:
        raise NotFound(f'no bill for admission {admission_id}')
    return Response({'ok': True, 'data': format_bill(bill)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsBillingRole])
def bills(request):
    q = BillListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page = q.validated_data.get('page') or 1
    page_size = q.validated_data.get('pageSize')
    data, total = list_bills(status=q.validated_data.get('status'), page=page, page_size=page_size)
    return Response({
        'ok': True,
        'data': data,
        'pagination': {'total': total, 'page': page, 'pageSize': page_size or total},
    })
