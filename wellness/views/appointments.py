"""
Appointment endpoints.

Employees book counselling sessions and may cancel them while they are
still only scheduled.  Admin users see every booking and move it
through the confirmed/completed states.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from wellness.models import Appointment
from wellness.permissions import IsAdminRole
from wellness.serializers.appointments import (
    AppointmentCreateSerializer,
    AppointmentListQuerySerializer,
    AppointmentStatusSerializer,
)
from wellness.services import appointments as svc
from wellness.services.dashboard import invalidate_summary


def _apply_status(request, appointment_id: int, new_status: str):
    try:
        appt = svc.change_status(request.user, appointment_id, new_status)
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_appointment(appt)})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments(request):
    """GET lists the caller's bookings (soonest first); POST books a new one."""
    if request.method == 'GET':
        return Response({'ok': True, 'data': svc.list_for_user(request.user)})
    s = AppointmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appt = svc.book(
        request.user,
        when=s.validated_data['when'],
        type=s.validated_data['type'],
        notes=s.validated_data.get('notes', ''),
    )
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_appointment(appt)}, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cancel_appointment(request, pk: int):
    return _apply_status(request, pk, Appointment.STATUS_CANCELLED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_appointments(request):
    q = AppointmentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    data = svc.list_all(status=q.validated_data.get('status'), upcoming_only=q.validated_data.get('upcoming', False))
    return Response({'ok': True, 'data': data})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_appointment_status(request):
    s = AppointmentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return _apply_status(request, s.validated_data['id'], s.validated_data['status'])
