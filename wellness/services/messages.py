import logging
from typing import Optional

import bleach
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.db.models import Q

from wellness.models import Message, User
from wellness.permissions import is_admin_user
from wellness.services.audit import log_action
from wellness.services.formatting import iso
from wellness.services.profiles import profile_summary

logger = logging.getLogger(__name__)

STAFF_INBOX_GROUP = 'inbox.staff'


def user_inbox_group(user_id: int) -> str:
    return f'inbox.{user_id}'


def _clean(text: Optional[str]) -> str:
    return bleach.clean((text or '').strip(), strip=True)


def serialize_message(m: Message, *, with_sender: bool = False) -> dict:
    data = {
        'id': m.id,
        'fromUserId': m.from_user_id,
        'toUserId': m.to_user_id,
        'subject': m.subject,
        'message': m.message,
        'isRead': m.is_read,
        'isAnonymous': m.is_anonymous,
        'createdAt': iso(m.created_at),
    }
    if with_sender:
        data['fromUser'] = None if m.is_anonymous else profile_summary(m.from_user)
    return data


def _push(message: Message) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    event = {'type': 'inbox.message', 'message': serialize_message(message)}
    groups = [user_inbox_group(message.to_user_id)] if message.to_user_id else [STAFF_INBOX_GROUP]
    for group in groups:
        async_to_sync(channel_layer.group_send)(group, event)


def list_for_user(user: User) -> list[dict]:
    qs = Message.objects.filter(Q(from_user=user) | Q(to_user=user)).order_by('-created_at', '-id')
    return [serialize_message(m) for m in qs]


def list_sent_by(user: User) -> list[dict]:
    qs = Message.objects.filter(from_user=user).order_by('-created_at', '-id')
    return [serialize_message(m) for m in qs]


def list_all(*, unread_only: bool = False, page: int = 1, page_size: int = 20) -> tuple[list[dict], int]:
    qs = Message.objects.select_related('from_user', 'from_user__profile')
    if unread_only:
        qs = qs.filter(is_read=False)
    total = qs.count()
    page = max(1, int(page or 1))
    page_size = min(100, max(1, int(page_size or 20)))
    start = (page - 1) * page_size
    items = qs.order_by('-created_at', '-id')[start:start + page_size]
    return [serialize_message(m, with_sender=True) for m in items], total


def send(sender: Optional[User], *, subject: str, body: str, to_user: Optional[User] = None,
         anonymous: bool = False) -> Message:
    """Store a message and push it to the recipient's inbox channel.

    Without ``to_user`` the message lands in the shared HR inbox read by
    every admin user.  Anonymous reports drop the sender entirely.
    """
    subject = _clean(subject)
    body = _clean(body)
    if not subject or not body:
        raise ValueError('Please fill in both subject and message')
    msg = Message.objects.create(
        from_user=None if anonymous else sender,
        to_user=to_user,
        subject=subject[:255],
        message=body,
        is_anonymous=anonymous,
    )
    log_action(user=None if anonymous else sender, action='message_send', object_type='message', object_id=msg.id,
               detail={'to': to_user.id if to_user else None, 'anonymous': anonymous})
    transaction.on_commit(lambda: _push(msg))
    return msg


def mark_read(user: User, message_id: int) -> Message:
    msg = Message.objects.filter(id=message_id).first()
    if msg is None:
        raise LookupError('Message not found')
    if not is_admin_user(user) and msg.to_user_id != user.id:
        raise PermissionError('You cannot modify this message')
    if not msg.is_read:
        msg.is_read = True
        msg.save(update_fields=['is_read'])
    return msg


@transaction.atomic
def reply(admin: User, message_id: int, text: str) -> Message:
    original = Message.objects.select_for_update().filter(id=message_id).first()
    if original is None:
        raise LookupError('Message not found')
    if original.from_user_id is None:
        raise ValueError('Anonymous reports cannot be answered')
    if not _clean(text):
        raise ValueError('Please enter a reply message')
    answer = send(admin, subject=f'Re: {original.subject}', body=text, to_user=original.from_user)
    if not original.is_read:
        original.is_read = True
        original.save(update_fields=['is_read'])
    return answer
