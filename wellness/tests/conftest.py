import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from wellness.models import User, UserProfile


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters and the dashboard summary live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def employee(db):
    user = User.objects.create_user(email='amira@psychhub.org', password='secret123', role='employee')
    UserProfile.objects.create(user=user, first_name='Amira', last_name='Ben Salah',
                               position='Analyst', department='Finance')
    return user


@pytest.fixture
def other_employee(db):
    return User.objects.create_user(email='karim@psychhub.org', password='secret123', role='employee')


@pytest.fixture
def counselor(db):
    return User.objects.create_user(email='counselor@psychhub.org', password='secret123', role='counselor')


def _authenticate(user: User) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def client_for():
    """Return a factory building an APIClient authenticated as a user."""
    return _authenticate


@pytest.fixture
def employee_client(employee):
    return _authenticate(employee)


@pytest.fixture
def counselor_client(counselor):
    return _authenticate(counselor)
