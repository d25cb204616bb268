"""
Donor Selection - deterministic presentation order for matched donors
Most recently registered first; ties broken by donor identifier ascending
"""
from algorithms.blood_compatibility import record_field


def registered_at_of(donor):
    return record_field(donor, 'registered_at', 'created_at')


def donor_id_of(donor):
    return record_field(donor, 'donor_id', 'id', 'pk')


def order_for_display(donors, registered_at=registered_at_of, donor_id=donor_id_of):
    """
    Order donors for display

    Args:
        donors: Iterable of donor records (any iterable, consumed once)
        registered_at: Accessor for the registration timestamp
        donor_id: Accessor for the donor identifier

    Returns:
        New list; donors without a registration timestamp go last
    """
    ordered = sorted(donors, key=lambda d: str(donor_id(d)))

    # Stable second pass keeps the identifier order within equal timestamps
    ordered.sort(
        key=lambda d: (registered_at(d) is not None, registered_at(d)),
        reverse=True,
    )
    return ordered
