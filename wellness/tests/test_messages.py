import pytest
from django.urls import reverse

from wellness.models import Message

pytestmark = pytest.mark.django_db


def test_employee_message_goes_to_hr_inbox(employee_client, employee):
    r = employee_client.post(reverse('send_message'), {'subject': 'Workload', 'message': 'Too many late shifts'}, format='json')
    assert r.status_code == 201
    msg = Message.objects.get(id=r.data['data']['id'])
    assert msg.from_user == employee
    assert msg.to_user is None
    assert msg.is_read is False


def test_send_requires_subject_and_message(employee_client):
    r = employee_client.post(reverse('send_message'), {'subject': '  ', 'message': 'text'}, format='json')
    assert r.status_code == 400
    assert r.data['detail'] == 'Please fill in both subject and message'
    assert not Message.objects.exists()


def test_message_body_is_sanitised(employee_client):
    r = employee_client.post(reverse('send_message'), {'subject': 'Hi', 'message': '<script>x</script>hello'}, format='json')
    assert r.status_code == 201
    assert '<script>' not in Message.objects.get().message


def test_employee_cannot_message_another_employee(employee_client, other_employee):
    r = employee_client.post(reverse('send_message'), {
        'subject': 'Hey', 'message': 'Lunch?', 'toUserId': other_employee.id,
    }, format='json')
    assert r.status_code == 403


def test_employee_may_address_a_counselor(employee_client, counselor):
    r = employee_client.post(reverse('send_message'), {
        'subject': 'Follow up', 'message': 'About our session', 'toUserId': counselor.id,
    }, format='json')
    assert r.status_code == 201
    assert Message.objects.get().to_user == counselor


def test_unknown_recipient_returns_404(employee_client):
    r = employee_client.post(reverse('send_message'), {'subject': 'a', 'message': 'b', 'toUserId': 4242}, format='json')
    assert r.status_code == 404


def test_reply_reaches_original_sender(employee, employee_client, counselor_client):
    original = Message.objects.create(from_user=employee, subject='Sleep', message='I cannot sleep')
    r = counselor_client.post(reverse('admin_reply'), {'id': original.id, 'text': 'Let us talk on Monday'}, format='json')
    assert r.status_code == 201
    assert r.data['data']['subject'] == 'Re: Sleep'
    assert r.data['data']['toUserId'] == employee.id
    original.refresh_from_db()
    assert original.is_read is True

    inbox = employee_client.get(reverse('messages'))
    assert inbox.status_code == 200
    subjects = [m['subject'] for m in inbox.data['data']]
    assert subjects[0] == 'Re: Sleep'
    assert 'Sleep' in subjects


def test_anonymous_report_cannot_be_answered(employee_client, counselor_client):
    r = employee_client.post(reverse('anonymous_report'), {'subject': 'Harassment', 'message': 'In the warehouse'}, format='json')
    assert r.status_code == 201
    report = Message.objects.get()
    assert report.is_anonymous is True
    assert report.from_user is None
    # not visible in the reporter's own history
    assert employee_client.get(reverse('messages')).data['data'] == []

    reply = counselor_client.post(reverse('admin_reply'), {'id': report.id, 'text': 'Thanks'}, format='json')
    assert reply.status_code == 400
    assert reply.data['detail'] == 'Anonymous reports cannot be answered'


def test_reply_needs_text(employee, counselor_client):
    original = Message.objects.create(from_user=employee, subject='Q', message='?')
    r = counselor_client.post(reverse('admin_reply'), {'id': original.id, 'text': '   '}, format='json')
    assert r.status_code == 400


def test_mark_read_permissions(employee, other_employee, employee_client, counselor_client, client_for):
    addressed = Message.objects.create(to_user=employee, subject='Re: Q', message='Answer')
    r = employee_client.post(reverse('mark_read'), {'id': addressed.id}, format='json')
    assert r.status_code == 200
    assert r.data['data']['isRead'] is True

    inbox_item = Message.objects.create(from_user=other_employee, subject='Private', message='...')
    r = employee_client.post(reverse('mark_read'), {'id': inbox_item.id}, format='json')
    assert r.status_code == 403
    r = counselor_client.post(reverse('mark_read'), {'id': inbox_item.id}, format='json')
    assert r.status_code == 200

    r = client_for(other_employee).post(reverse('mark_read'), {'id': 98765}, format='json')
    assert r.status_code == 404


def test_admin_inbox_pagination_and_sender(employee, counselor_client):
    for i in range(3):
        Message.objects.create(from_user=employee, subject=f'Topic {i}', message='body')
    Message.objects.create(subject='Anon', message='body', is_anonymous=True, is_read=True)

    r = counselor_client.get(reverse('admin_messages'), {'page': 1, 'pageSize': 2})
    assert r.status_code == 200
    assert r.data['pagination'] == {'total': 4, 'page': 1, 'pageSize': 2}
    assert len(r.data['data']) == 2

    unread = counselor_client.get(reverse('admin_messages'), {'unread': 'true'})
    assert unread.data['pagination']['total'] == 3
    assert unread.data['data'][0]['fromUser']['firstName'] == 'Amira'
