# hospitals/tasks.py
"""
Celery tasks for inventory housekeeping
"""
from celery import shared_task

from hospitals.utils import expire_stale_inventory


@shared_task
def expire_inventory():
    """
    Daily sweep: available units past their expiry date become 'expired'.
    Scheduled from CELERY_BEAT_SCHEDULE.
    """
    updated = expire_stale_inventory()
    return f"Expired {updated} inventory rows"
