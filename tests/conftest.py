from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from donors.models import DonorProfile
from hospitals.models import BloodCenter, City
from receivers.models import ReceiverProfile


@pytest.fixture
def api_client(django_user_model):
    """Authenticated API client"""
    user = django_user_model.objects.create_user(username='staff', password='pw-not-used')
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def city(db):
    return City.objects.create(city_id='DAL', city_name='Dallas')


@pytest.fixture
def make_donor(db):
    """Create a donor; `days_ago` sets the registration time relative to a fixed now"""
    now = timezone.now()

    def _make(donor_id, blood_type, days_ago=0, **extra):
        defaults = {
            'full_name': f'Donor {donor_id}',
            'age': 30,
            'sex': 'F',
            'is_available': True,
        }
        defaults.update(extra)
        donor = DonorProfile.objects.create(donor_id=donor_id, blood_type=blood_type, **defaults)
        # created_at is auto_now_add; rewrite it for deterministic recency
        DonorProfile.objects.filter(pk=donor_id).update(
            created_at=now - timedelta(days=days_ago)
        )
        donor.refresh_from_db()
        return donor
    return _make


@pytest.fixture
def make_receiver(db):
    def _make(receiver_id, blood_type, **extra):
        defaults = {
            'full_name': f'Receiver {receiver_id}',
            'age': 40,
            'sex': 'M',
        }
        defaults.update(extra)
        return ReceiverProfile.objects.create(receiver_id=receiver_id, blood_type=blood_type, **defaults)
    return _make


@pytest.fixture
def blood_center(city):
    return BloodCenter.objects.create(
        center_id='BC1',
        center_name='Carter BloodCare',
        address='2205 Highway 121',
        city=city,
        latitude=32.7767,
        longitude=-96.7970,
    )
