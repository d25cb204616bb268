import logging
from dataclasses import dataclass, field

from algorithms.blood_compatibility import BloodType, filter_compatible_donors
from algorithms.display import assign_care_team
from algorithms.selection import order_for_display
from donors.models import DonorProfile
from hospitals.models import Hospital

# Logger setup
logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    receiver: object
    blood_type: BloodType
    compatible_types: frozenset
    donors: list
    warnings: list = field(default_factory=list)

    @property
    def skipped(self):
        return len(self.warnings)


def match_donors_for_receiver(receiver, candidates=None):
    """
    Match and order compatible donors for a receiver.

    Steps:
    1. Candidates: available donors (unless supplied)
    2. Keep those whose blood type the receiver can accept
    3. Order newest registration first, then donor_id

    Raises InvalidBloodTypeError if the receiver's own blood type is corrupt.
    """
    if candidates is None:
        candidates = DonorProfile.objects.filter(is_available=True).select_related('city')

    matches = filter_compatible_donors(receiver.blood_type, candidates)
    ordered = order_for_display(matches)

    logger.info(
        f"{len(ordered)} donors matched for receiver {receiver.pk} ({matches.recipient}), "
        f"{matches.skipped} skipped"
    )
    return MatchResult(
        receiver=receiver,
        blood_type=matches.recipient,
        compatible_types=matches.accepted,
        donors=ordered,
        warnings=list(matches.warnings),
    )


def care_team_for(result, rng=None):
    """
    Presentation-only hospital/doctor picks for a match result.
    Hospitals come from the receiver's city, falling back to all hospitals.
    """
    hospitals = Hospital.objects.prefetch_related('doctors')
    city_id = getattr(result.receiver, 'city_id', None)
    if city_id and hospitals.filter(city_id=city_id).exists():
        hospitals = hospitals.filter(city_id=city_id)

    return assign_care_team(
        result.donors,
        list(hospitals),
        doctors_for=lambda hospital: hospital.doctors.all(),
        rng=rng,
    )
