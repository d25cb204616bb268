"""
Display augmentation for matched donors.

Pairs each donor with a hospital and doctor for presentation only. This is
kept apart from the compatibility resolver; nothing here decides who matches.
"""
import random


def assign_care_team(donors, hospitals, doctors_for=None, rng=None):
    """
    Pick a hospital and a doctor at random for each donor

    Args:
        donors: Ordered donor records; order is preserved
        hospitals: Candidate hospitals (list)
        doctors_for: Callable hospital -> list of doctors; None means no doctors
        rng: random.Random instance (seed it in tests)

    Returns:
        List of dicts: {'donor', 'hospital', 'doctor'}; hospital/doctor are
        None when nothing is available to pick from
    """
    rng = rng or random.Random()
    hospitals = list(hospitals)

    assignments = []
    for donor in donors:
        hospital = rng.choice(hospitals) if hospitals else None
        doctors = list(doctors_for(hospital)) if (hospital is not None and doctors_for) else []
        doctor = rng.choice(doctors) if doctors else None
        assignments.append({
            'donor': donor,
            'hospital': hospital,
            'doctor': doctor,
        })
    return assignments
