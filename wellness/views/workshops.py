"""
Workshop endpoints.

Employees browse the active catalogue and register or withdraw.  Admin
users manage the catalogue and confirm or cancel registrations.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from wellness.permissions import IsAdminRole
from wellness.serializers.workshops import (
    RegistrationStatusSerializer,
    WorkshopCreateSerializer,
    WorkshopIdSerializer,
    WorkshopRegisterSerializer,
)
from wellness.services import workshops as svc
from wellness.services.dashboard import invalidate_summary


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def workshops(request):
    return Response({'ok': True, 'data': svc.list_active(request.user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def register_workshop(request):
    s = WorkshopRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        reg = svc.register(request.user, s.validated_data['workshopId'], s.validated_data.get('notes', ''))
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_registration(reg)}, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cancel_workshop_registration(request):
    s = WorkshopIdSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        reg = svc.cancel_registration(request.user, s.validated_data['workshopId'])
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_registration(reg)})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_workshops(request):
    """GET lists every workshop (newest first); POST adds one."""
    if request.method == 'GET':
        return Response({'ok': True, 'data': svc.list_all()})
    s = WorkshopCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    w = svc.create_workshop(request.user, **s.validated_data)
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_workshop(w)}, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_workshop_detail(request, pk: int):
    try:
        svc.delete_workshop(request.user, pk)
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    invalidate_summary()
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_workshop_registrations(request, pk: int):
    try:
        data = svc.list_registrations(pk)
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response({'ok': True, 'data': data})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_registration_status(request):
    s = RegistrationStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        reg = svc.set_registration_status(request.user, s.validated_data['id'], s.validated_data['status'])
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_registration(reg)})
