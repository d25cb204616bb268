# algorithms/inventory.py
from datetime import date, timedelta

EXPIRING_SOON_DAYS = 7

STATUS_AVAILABLE = 'available'
STATUS_RESERVED = 'reserved'
STATUS_USED = 'used'
STATUS_EXPIRED = 'expired'
STATUSES = (STATUS_AVAILABLE, STATUS_RESERVED, STATUS_USED, STATUS_EXPIRED)


def is_expiring_soon(unit, today=None, window_days=EXPIRING_SOON_DAYS):
    """
    Available stock that expires after today but within window_days
    """
    today = today or date.today()
    if unit.status != STATUS_AVAILABLE or unit.expiry_date is None:
        return False
    return today < unit.expiry_date <= today + timedelta(days=window_days)


def summarize_inventory(units, today=None, window_days=EXPIRING_SOON_DAYS):
    """
    Count inventory records by status

    Returns:
        dict with total, available, reserved, used, expired, expiring_soon
        (record counts) and total_units (row quantities summed)
    """
    today = today or date.today()
    summary = {
        'total': 0,
        STATUS_AVAILABLE: 0,
        STATUS_RESERVED: 0,
        STATUS_USED: 0,
        STATUS_EXPIRED: 0,
        'expiring_soon': 0,
        'total_units': 0,
    }

    for unit in units:
        summary['total'] += 1
        summary['total_units'] += unit.quantity or 0
        if unit.status in STATUSES:
            summary[unit.status] += 1
        if is_expiring_soon(unit, today, window_days):
            summary['expiring_soon'] += 1

    return summary
