import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from wellness.auth_views import get_user_role
from wellness.models import AuditEvent, User
from wellness.serializers.auth import RegisterSerializer

pytestmark = pytest.mark.django_db


def register(client, email='new.hire@psychhub.org', password='Calm#Mind42', confirm=None):
    return client.post(reverse('register_view'), {
        'email': email,
        'password': password,
        'confirmPassword': confirm if confirm is not None else password,
    }, format='json')


def test_register_creates_employee_and_signs_in():
    client = APIClient()
    r = register(client, email='New.Hire@PsychHub.org', password='Calm#Mind42')
    assert r.status_code == 201
    assert r.data['ok'] is True
    assert r.data['role'] == 'employee'
    assert r.data['isAdmin'] is False
    assert r.data['needsProfileSetup'] is True
    assert r.data['token'] and r.data['jwt_access'] and r.data['jwt_refresh']
    u = User.objects.get(email='new.hire@psychhub.org')
    assert u.username == 'new.hire@psychhub.org'


def test_register_ignores_role_in_body():
    client = APIClient()
    r = client.post(reverse('register_view'), {
        'email': 'sneaky@psychhub.org', 'password': 'Calm#Mind42', 'confirmPassword': 'Calm#Mind42', 'role': 'admin',
    }, format='json')
    assert r.status_code == 201
    assert User.objects.get(email='sneaky@psychhub.org').role == 'employee'


def test_register_rejects_mismatched_passwords():
    r = register(APIClient(), password='Calm#Mind42', confirm='Calm#Mind43')
    assert r.status_code == 400
    assert r.data['ok'] is False
    assert 'confirmPassword' in r.data['error']['message']
    assert not User.objects.filter(email='new.hire@psychhub.org').exists()


def test_register_rejects_short_password():
    r = register(APIClient(), password='a1#b')
    assert r.status_code == 400
    assert 'password' in r.data['error']['message']


def test_register_rejects_duplicate_email(employee):
    r = register(APIClient(), email='AMIRA@psychhub.org')
    assert r.status_code == 400
    assert 'email' in r.data['error']['message']


def test_register_race_on_same_email_returns_400(employee, monkeypatch):
    # the other sign-up commits between validation and insert
    monkeypatch.setattr(RegisterSerializer, 'validate_email', lambda self, v: v.strip().lower())
    r = register(APIClient(), email='amira@psychhub.org')
    assert r.status_code == 400
    assert r.data['error']['message'] == {'email': ['An account with this email already exists']}
    assert User.objects.filter(email='amira@psychhub.org').count() == 1


def test_no_role_bypass_in_login(employee):
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'amira@psychhub.org', 'password': 'secret123', 'role': 'admin'}, format='json')
    assert r.status_code == 200
    assert r.data['role'] == 'employee'
    assert r.data['isAdmin'] is False
    employee.refresh_from_db()
    assert employee.role == 'employee'


def test_login_returns_jwt_and_legacy_token(employee):
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'Amira@PsychHub.org', 'password': 'secret123'}, format='json')
    assert r.status_code == 200
    assert 'jwt_access' in r.data and r.data['jwt_access']
    assert 'jwt_refresh' in r.data and r.data['jwt_refresh']
    assert 'token' in r.data and r.data['token']
    # the fixture created a complete profile
    assert r.data['needsProfileSetup'] is False


def test_login_failure_is_audited(employee):
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'amira@psychhub.org', 'password': 'wrong-pass'}, format='json')
    assert r.status_code == 400
    assert r.data == {'ok': False, 'detail': 'Invalid email or password'}
    assert AuditEvent.objects.filter(action='login', detail__result='fail').exists()


def test_counselor_login_is_admin(counselor):
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'counselor@psychhub.org', 'password': 'secret123'}, format='json')
    assert r.status_code == 200
    assert r.data['isAdmin'] is True
    assert r.data['role'] == 'counselor'


def test_legacy_token_authenticates_requests(employee):
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'amira@psychhub.org', 'password': 'secret123'}, format='json')
    client.credentials(HTTP_AUTHORIZATION=f"Token {r.data['token']}")
    me = client.get(reverse('me_view'))
    assert me.status_code == 200
    assert me.data['user']['email'] == 'amira@psychhub.org'
    assert me.data['adminRole'] is None


def test_jwt_authenticates_requests(counselor):
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'counselor@psychhub.org', 'password': 'secret123'}, format='json')
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['jwt_access']}")
    me = client.get(reverse('me_view'))
    assert me.status_code == 200
    assert me.data['adminRole'] == 'counselor'


def test_refresh_and_logout_blacklists_token(employee):
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'amira@psychhub.org', 'password': 'secret123'}, format='json')
    refresh = r.data['jwt_refresh']

    rr = client.post(reverse('jwt_refresh_view'), {'refresh': refresh}, format='json')
    assert rr.status_code == 200
    assert rr.data['jwt_access']

    client.credentials(HTTP_AUTHORIZATION=f"Token {r.data['token']}")
    out = client.post(reverse('jwt_logout_view'), {'refresh': refresh}, format='json')
    assert out.status_code == 200
    assert out.data['blacklisted'] == 1

    again = APIClient().post(reverse('jwt_refresh_view'), {'refresh': refresh}, format='json')
    assert again.status_code == 401
    # the legacy token is gone as well
    assert client.get(reverse('me_view')).status_code == 401


def test_anonymous_requests_are_rejected():
    client = APIClient()
    for name in ('profile', 'appointments', 'messages', 'workshops', 'quizzes', 'articles'):
        assert client.get(reverse(name)).status_code == 401


def test_get_user_role(employee, counselor):
    assert get_user_role(None) is None
    assert get_user_role(employee) is None
    assert get_user_role(counselor) == 'counselor'
    admin = User.objects.create_user(email='boss@psychhub.org', password='secret123', role='admin')
    assert get_user_role(admin) == 'admin'
