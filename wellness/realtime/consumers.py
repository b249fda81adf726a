import json

from channels.generic.websocket import AsyncWebsocketConsumer

from wellness.permissions import is_admin_user
from wellness.services.messages import STAFF_INBOX_GROUP, user_inbox_group


class UpdatesConsumer(AsyncWebsocketConsumer):
    """Broadcast channel telling clients which cached views were refreshed."""
    GROUP = "updates"

    async def connect(self):
        await self.channel_layer.group_add(self.GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.GROUP, self.channel_name)

    async def broadcast_refresh(self, event):
        # event: {"type": "broadcast.refresh", "version": int, "ts": "...", "keys": [...]}
        await self.send(json.dumps(event))


class InboxConsumer(AsyncWebsocketConsumer):
    """Pushes new messages to their recipient.

    Every user listens on their own inbox group; admin users also listen
    on the shared HR inbox.
    """

    async def connect(self):
        user = self.scope.get("user")
        if not user or not getattr(user, "is_authenticated", False):
            await self.close(code=4001)
            return
        self.groups_joined = [user_inbox_group(user.id)]
        if is_admin_user(user):
            self.groups_joined.append(STAFF_INBOX_GROUP)
        for group in self.groups_joined:
            await self.channel_layer.group_add(group, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        for group in getattr(self, "groups_joined", []):
            await self.channel_layer.group_discard(group, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        # the socket is push-only; sending goes through the REST API
        await self.send(json.dumps({"type": "error", "code": 4002, "message": "unsupported_type"}))

    async def inbox_message(self, event):
        await self.send(json.dumps({"type": "message", "message": event.get("message", {})}))
