"""
Message endpoints.

Employees write to the HR inbox and read the replies addressed to them.
Admin users read the whole inbox, mark messages read and answer them.
"""
from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework import status

from wellness.permissions import IsAdminRole, is_admin_user
from wellness.serializers.messages import (
    MessageIdSerializer,
    MessageListQuerySerializer,
    MessageReplySerializer,
    MessageSendSerializer,
)
from wellness.services import messages as svc
from wellness.services.dashboard import invalidate_summary

User = get_user_model()


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def messages(request):
    """Return messages sent by or addressed to the caller, newest first."""
    return Response({'ok': True, 'data': svc.list_for_user(request.user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([ScopedRateThrottle])
def send_message(request):
    """Send a message; without ``toUserId`` it goes to the HR inbox."""
    s = MessageSendSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    to_user = None
    target_id = s.validated_data.get('toUserId')
    if target_id:
        to_user = User.objects.filter(id=target_id, is_active=True).first()
        if to_user is None:
            return Response({'ok': False, 'detail': 'Recipient not found'}, status=status.HTTP_404_NOT_FOUND)
        if not is_admin_user(request.user) and not is_admin_user(to_user):
            return Response({'ok': False, 'detail': 'Messages can only be sent to the HR team'}, status=status.HTTP_403_FORBIDDEN)
    try:
        msg = svc.send(request.user, subject=s.validated_data['subject'], body=s.validated_data['message'], to_user=to_user)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_message(msg)}, status=status.HTTP_201_CREATED)

send_message.cls.throttle_scope = 'message_send'


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_read(request):
    """Mark a message read; employees may only touch messages addressed to them."""
    s = MessageIdSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        msg = svc.mark_read(request.user, s.validated_data['id'])
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except PermissionError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_403_FORBIDDEN)
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_message(msg)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_messages(request):
    q = MessageListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page = q.validated_data.get('page', 1)
    page_size = q.validated_data.get('pageSize', 20)
    data, total = svc.list_all(unread_only=q.validated_data.get('unread', False), page=page, page_size=page_size)
    return Response({'ok': True, 'data': data, 'pagination': {'total': total, 'page': page, 'pageSize': page_size}})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_reply(request):
    s = MessageReplySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        answer = svc.reply(request.user, s.validated_data['id'], s.validated_data['text'])
    except LookupError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ValueError as e:
        return Response({'ok': False, 'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    invalidate_summary()
    return Response({'ok': True, 'data': svc.serialize_message(answer)}, status=status.HTTP_201_CREATED)
