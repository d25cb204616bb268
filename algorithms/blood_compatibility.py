"""
Blood Type Compatibility Resolver
Determines which donor blood types a recipient can safely receive from
"""
import logging
from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType

logger = logging.getLogger(__name__)


class InvalidBloodTypeError(ValueError):
    """Raised when a value is not one of the eight ABO/Rh blood types"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid blood type: {value!r}")


class DataQualityWarning(UserWarning):
    """
    A candidate record was skipped because its blood type is unusable.
    Collected and reported to the caller, never raised.
    """

    def __init__(self, record, reason):
        self.record = record
        self.reason = reason
        super().__init__(f"{record_identifier(record)}: {reason}")


class BloodType(str, Enum):
    A_POS = 'A+'
    A_NEG = 'A-'
    B_POS = 'B+'
    B_NEG = 'B-'
    AB_POS = 'AB+'
    AB_NEG = 'AB-'
    O_POS = 'O+'
    O_NEG = 'O-'

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, value):
        """
        Parse a canonical blood type spelling ('A+', 'O-', ...).

        Args:
            value: A BloodType or one of the eight canonical strings

        Returns:
            BloodType

        Raises:
            InvalidBloodTypeError: for anything else, including None
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidBloodTypeError(value)


BLOOD_TYPE_CHOICES = [(t.value, t.value) for t in BloodType]

_A_POS, _A_NEG = BloodType.A_POS, BloodType.A_NEG
_B_POS, _B_NEG = BloodType.B_POS, BloodType.B_NEG
_AB_POS, _AB_NEG = BloodType.AB_POS, BloodType.AB_NEG
_O_POS, _O_NEG = BloodType.O_POS, BloodType.O_NEG

# Recipient -> donor types it can safely receive from
COMPATIBILITY = MappingProxyType({
    _A_POS: frozenset({_A_POS, _A_NEG, _O_POS, _O_NEG}),
    _A_NEG: frozenset({_A_NEG, _O_NEG}),
    _B_POS: frozenset({_B_POS, _B_NEG, _O_POS, _O_NEG}),
    _B_NEG: frozenset({_B_NEG, _O_NEG}),
    _AB_POS: frozenset(BloodType),  # Universal recipient
    _AB_NEG: frozenset({_A_NEG, _B_NEG, _AB_NEG, _O_NEG}),
    _O_POS: frozenset({_O_POS, _O_NEG}),
    _O_NEG: frozenset({_O_NEG}),
})


def is_compatible(recipient, donor):
    """
    Check if a recipient can receive blood from a donor

    Args:
        recipient: Recipient's blood type (e.g., 'A+')
        donor: Donor's blood type (e.g., 'O-')

    Returns:
        Boolean: True if compatible, False otherwise

    Raises:
        InvalidBloodTypeError: if either value is not a blood type
    """
    return BloodType.parse(donor) in COMPATIBILITY[BloodType.parse(recipient)]


def compatible_donors(recipient):
    """Donor blood types a recipient can receive from, as a frozenset of BloodType"""
    return COMPATIBILITY[BloodType.parse(recipient)]


def compatible_recipients(donor):
    """Recipient blood types that can receive from this donor"""
    donor = BloodType.parse(donor)
    return frozenset(r for r, donors in COMPATIBILITY.items() if donor in donors)


def compatibility_chart():
    """
    Rows for the informational compatibility chart, in declaration order.
    Both directions are read from COMPATIBILITY.
    """
    return [
        {
            'blood_type': t.value,
            'can_receive_from': [d.value for d in BloodType if d in COMPATIBILITY[t]],
            'can_donate_to': [r.value for r in BloodType if r in compatible_recipients(t)],
        }
        for t in BloodType
    ]


def record_field(record, *names):
    """Read the first present field from a mapping or an object, else None"""
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def record_identifier(record):
    identifier = record_field(record, 'donor_id', 'id', 'pk')
    return f"donor {identifier}" if identifier is not None else "donor record"


def blood_type_of(record):
    return record_field(record, 'blood_type')


class CompatibleDonors:
    """
    Lazy, restartable view of the candidates compatible with a recipient.

    Each iteration re-reads the candidates and preserves their order. Records
    with a missing or malformed blood type are skipped. Every pass collects
    its own warnings and publishes them to `warnings` when it completes, so
    `warnings` always describes the most recent complete pass and a pass still
    in progress never changes it.
    """

    def __init__(self, recipient, candidates, blood_type=blood_type_of):
        self.recipient = BloodType.parse(recipient)
        self.accepted = COMPATIBILITY[self.recipient]
        # One-shot iterators would make a second pass come back empty
        if isinstance(candidates, Iterator):
            candidates = list(candidates)
        self._candidates = candidates
        self._blood_type = blood_type
        self.warnings = []

    def __iter__(self):
        warnings = []
        for record in self._candidates:
            raw = self._blood_type(record)
            if raw is None or raw == '':
                reason = "missing blood type"
            else:
                try:
                    donor_type = BloodType.parse(raw)
                except InvalidBloodTypeError:
                    reason = f"malformed blood type {raw!r}"
                else:
                    if donor_type in self.accepted:
                        yield record
                    continue

            warning = DataQualityWarning(record, reason)
            warnings.append(warning)
            logger.warning(f"Skipping {warning}")

        self.warnings = warnings

    @property
    def skipped(self):
        return len(self.warnings)


def filter_compatible_donors(recipient, candidates, blood_type=blood_type_of):
    """
    Filter candidate donors down to those compatible with a recipient

    Args:
        recipient: Recipient's blood type; validated immediately
        candidates: Sequence of donor records (dicts or objects with blood_type)
        blood_type: Accessor returning a record's raw blood type

    Returns:
        CompatibleDonors: iterable in input order, with `skipped`/`warnings`
    """
    return CompatibleDonors(recipient, candidates, blood_type=blood_type)
