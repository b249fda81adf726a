import logging

from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("unhandled error in %s", context.get('view'))
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    code = getattr(exc, 'default_code', None) or 'api_error'
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    headers = {'Retry-After': resp['Retry-After']} if resp.has_header('Retry-After') else None
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code, headers=headers)


class Conflict(APIException):
    status_code = 409
    default_detail = 'Conflict with the current state of the resource.'
    default_code = 'conflict'
