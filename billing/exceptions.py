"""
Error taxonomy for discharge billing and the unified API error envelope.

Billing errors are DRF ``APIException`` subclasses so that services can
raise them directly and views need no translation layer.  Management
commands catch :class:`BillingError` and report ``str(exc)``.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class BillingError(APIException):
    """Base class for categorized billing failures."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'billing failed'
    default_code = 'billing_error'


class NotFound(BillingError):
    """The admission, or the doctor it references, does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'not found'
    default_code = 'not_found'


class InvalidState(BillingError):
    """The admission is not eligible for billing yet."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'admission is not billable'
    default_code = 'invalid_state'


class Conflict(BillingError):
    """A bill already exists for the admission."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'bill already exists'
    default_code = 'conflict'


class StoreFailure(BillingError):
    """The data store could not complete a read or write."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'data store unavailable'
    default_code = 'store_failure'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled API error: %s', exc, exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    if isinstance(exc, BillingError):
        return Response(
            {'ok': False, 'error': {'code': exc.default_code, 'message': str(exc.detail)}},
            status=resp.status_code,
        )
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    return Response({'ok': False, 'error': {'code': 'api_error', 'message': detail}}, status=resp.status_code)
