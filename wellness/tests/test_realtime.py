import pytest
from asgiref.sync import async_to_sync, sync_to_async
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from django.urls import reverse

from wellness.models import Message
from wellness.realtime.consumers import InboxConsumer

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def _in_memory_layer(settings):
    settings.CHANNEL_LAYERS = {"default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}}


def inbox_socket(user):
    communicator = WebsocketCommunicator(InboxConsumer.as_asgi(), "/ws/inbox/")
    communicator.scope["user"] = user
    return communicator


def test_anonymous_socket_is_rejected():
    async def scenario():
        communicator = inbox_socket(AnonymousUser())
        connected, code = await communicator.connect()
        await communicator.disconnect()
        return connected, code

    connected, code = async_to_sync(scenario)()
    assert connected is False
    assert code == 4001


def test_hr_inbox_message_reaches_counselor(counselor, employee_client, django_capture_on_commit_callbacks):
    def send():
        with django_capture_on_commit_callbacks(execute=True):
            r = employee_client.post(reverse('send_message'), {'subject': 'Overtime', 'message': 'Every weekend'}, format='json')
        assert r.status_code == 201
        return r.data['data']['id']

    async def scenario():
        communicator = inbox_socket(counselor)
        connected, _ = await communicator.connect()
        assert connected
        message_id = await sync_to_async(send)()
        event = await communicator.receive_json_from(timeout=2)
        await communicator.disconnect()
        return message_id, event

    message_id, event = async_to_sync(scenario)()
    assert event["type"] == "message"
    assert event["message"]["id"] == message_id
    assert event["message"]["toUserId"] is None
    assert event["message"]["subject"] == 'Overtime'


def test_reply_reaches_employee_socket_only(employee, other_employee, counselor_client,
                                            django_capture_on_commit_callbacks):
    original = Message.objects.create(from_user=employee, subject='Sleep', message='Cannot sleep')

    def reply():
        with django_capture_on_commit_callbacks(execute=True):
            r = counselor_client.post(reverse('admin_reply'), {'id': original.id, 'text': 'Call me'}, format='json')
        assert r.status_code == 201

    async def scenario():
        mine = inbox_socket(employee)
        other = inbox_socket(other_employee)
        assert (await mine.connect())[0]
        assert (await other.connect())[0]
        await sync_to_async(reply)()
        event = await mine.receive_json_from(timeout=2)
        nothing_for_other = await other.receive_nothing(timeout=0.2)
        await mine.disconnect()
        await other.disconnect()
        return event, nothing_for_other

    event, nothing_for_other = async_to_sync(scenario)()
    assert event["message"]["subject"] == 'Re: Sleep'
    assert event["message"]["toUserId"] == employee.id
    assert nothing_for_other is True


def test_inbox_socket_is_push_only(employee):
    async def scenario():
        communicator = inbox_socket(employee)
        await communicator.connect()
        await communicator.send_json_to({"type": "message", "text": "hi"})
        response = await communicator.receive_json_from(timeout=2)
        await communicator.disconnect()
        return response

    assert async_to_sync(scenario)()["code"] == 4002
