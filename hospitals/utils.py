import logging

from django.conf import settings
from django.utils import timezone

from algorithms import inventory
from algorithms.blood_compatibility import BloodType, compatible_donors
from algorithms.haversine import find_nearby_centers
from hospitals.models import BloodCenter, BloodInventory

# Logger setup
logger = logging.getLogger(__name__)


def get_compatible_inventory(recipient_blood_type):
    """
    Available stock a recipient of this blood type can receive.
    Compatibility comes from the local table, not from the database.
    """
    donor_types = [t.value for t in compatible_donors(recipient_blood_type)]
    return BloodInventory.objects.filter(
        blood_group__in=donor_types,
        status=inventory.STATUS_AVAILABLE,
        quantity__gt=0,
    ).select_related('hospital', 'center', 'doctor')


def get_inventory_by_blood_group(blood_group):
    return BloodInventory.objects.filter(
        blood_group=BloodType.parse(blood_group).value
    ).select_related('hospital', 'center', 'doctor')


def inventory_stats(queryset=None, today=None):
    """Unit counts by status for a queryset (defaults to all stock)"""
    if queryset is None:
        queryset = BloodInventory.objects.all()
    window = getattr(settings, 'INVENTORY_EXPIRING_SOON_DAYS', inventory.EXPIRING_SOON_DAYS)
    return inventory.summarize_inventory(queryset, today=today or timezone.localdate(), window_days=window)


def expire_stale_inventory(today=None):
    """
    Mark available stock past its expiry date as expired.

    Returns:
        Number of inventory rows updated
    """
    today = today or timezone.localdate()
    updated = BloodInventory.objects.filter(
        status=inventory.STATUS_AVAILABLE,
        expiry_date__lt=today,
    ).update(status=inventory.STATUS_EXPIRED)

    if updated:
        logger.info(f"Marked {updated} inventory rows as expired (before {today})")
    return updated


def nearby_blood_centers(lat, lng, radius_km=None):
    if radius_km is None:
        radius_km = getattr(settings, 'BLOOD_CENTER_RADIUS_KM', 15)
    centers = BloodCenter.objects.filter(latitude__isnull=False, longitude__isnull=False)
    return find_nearby_centers(lat, lng, centers, radius_km=radius_km)
