import pytest
from django.urls import reverse

from wellness.models import UserProfile

pytestmark = pytest.mark.django_db

SETUP = {
    'firstName': 'Karim',
    'lastName': 'Haddad',
    'position': 'Accountant',
    'department': 'Finance',
    'yearsAtCompany': '4',
    'maritalStatus': 'married',
    'hasChildren': True,
    'numberOfChildren': 'two',
    'sleepHours': '',
    'sleepWellOrganized': True,
}


def test_profile_setup_creates_profile(other_employee, client_for):
    client = client_for(other_employee)
    assert client.get(reverse('profile')).data['data'] is None
    r = client.post(reverse('profile'), SETUP, format='json')
    assert r.status_code == 200
    profile = UserProfile.objects.get(user=other_employee)
    assert profile.full_name == 'Karim Haddad'
    assert profile.years_at_company == 4
    # unparseable numbers fall back to zero
    assert profile.number_of_children == 0
    assert profile.sleep_hours == 0
    assert r.data['data']['maritalStatus'] == 'married'


def test_profile_setup_requires_identity_fields(other_employee, client_for):
    client = client_for(other_employee)
    r = client.post(reverse('profile'), dict(SETUP, position='   '), format='json')
    assert r.status_code == 400
    r = client.post(reverse('profile'), {'firstName': 'Karim'}, format='json')
    assert r.status_code == 400
    assert not UserProfile.objects.filter(user=other_employee).exists()


def test_profile_update_may_be_partial(employee, employee_client):
    r = employee_client.put(reverse('profile'), {'sleepHours': 7, 'department': '<i>People</i>'}, format='json')
    assert r.status_code == 200
    employee.profile.refresh_from_db()
    assert employee.profile.sleep_hours == 7
    assert employee.profile.department == 'People'
    assert employee.profile.first_name == 'Amira'


def test_login_flags_profile_setup_until_done(other_employee, client_for):
    client = client_for(other_employee)
    assert client.get(reverse('me_view')).data['needsProfileSetup'] is True
    client.post(reverse('profile'), SETUP, format='json')
    assert client.get(reverse('me_view')).data['needsProfileSetup'] is False


def test_profile_overview_collects_history(employee, employee_client):
    employee_client.post(reverse('send_message'), {'subject': 'Hello', 'message': 'First note'}, format='json')
    r = employee_client.get(reverse('profile_overview'))
    assert r.status_code == 200
    assert r.data['profile']['firstName'] == 'Amira'
    assert [m['subject'] for m in r.data['messages']] == ['Hello']
    assert r.data['quizResults'] == []
    assert r.data['appointments'] == []


@pytest.mark.parametrize('raw, expected', [
    ('7 years', 7),
    ('7.5', 7),
    (2.0, 2),
    (' 12', 12),
    ('-3', 0),
    ('about 5', 0),
])
def test_profile_numbers_read_leading_integer(other_employee, client_for, raw, expected):
    client = client_for(other_employee)
    r = client.post(reverse('profile'), dict(SETUP, yearsAtCompany=raw, sleepHours=raw, numberOfChildren=raw), format='json')
    assert r.status_code == 200
    profile = UserProfile.objects.get(user=other_employee)
    assert (profile.years_at_company, profile.sleep_hours, profile.number_of_children) == (expected,) * 3
