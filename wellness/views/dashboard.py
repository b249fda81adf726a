"""
Administrative dashboard endpoint.

Provides the counters shown on top of the admin screen.  Only admin
roles (counselor/admin) may access it.  The summary is cached for a
short while and dropped whenever one of the counted records changes.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole
from ..services.dashboard import get_summary


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_dashboard(request):
    return Response({'ok': True, 'data': get_summary()})
