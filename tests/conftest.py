import pytest
from datetime import datetime, timezone
from rest_framework.test import APIClient


@pytest.fixture
def user(db):
    from journal.models import User
    return User.objects.create_user(username="luna", email="luna@example.com", password="moonlight")


@pytest.fixture
def other_user(db):
    from journal.models import User
    return User.objects.create_user(username="sol", email="sol@example.com", password="daylight")


@pytest.fixture
def dream(user):
    from journal.models import Dream
    return Dream.objects.create(
        user=user,
        title="Falling",
        body="I was falling from a bridge into water",
        date=datetime(2026, 10, 1, 7, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def anonymous_client():
    return APIClient()
