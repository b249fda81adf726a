"""
HR support and emergency endpoints.

Contact details come from settings so each deployment can point the
app at its own HR team and local crisis line.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework import status

from wellness.serializers.messages import AnonymousReportSerializer
from wellness.services import messages
from wellness.services.dashboard import invalidate_summary
from wellness.services.support import support_info


@api_view(['GET'])
@permission_classes([AllowAny])
def support(request):
    return Response({'ok': True, 'data': support_info()})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([ScopedRateThrottle])
def anonymous_report(request):
    """File a confidential complaint; the stored message keeps no sender."""
    s = AnonymousReportSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        messages.send(request.user, subject=s.validated_data['subject'], body=s.validated_data['message'], anonymous=True)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    invalidate_summary()
    return Response({'ok': True}, status=status.HTTP_201_CREATED)

anonymous_report.cls.throttle_scope = 'message_send'
