from datetime import datetime, timezone

from algorithms.blood_compatibility import filter_compatible_donors
from algorithms.selection import order_for_display


def ts(day):
    return datetime(2024, 5, day, tzinfo=timezone.utc)


def ids(donors):
    return [d['id'] for d in donors]


def test_newest_registration_first():
    donors = [
        {'id': 'D1', 'registered_at': ts(1)},
        {'id': 'D2', 'registered_at': ts(3)},
        {'id': 'D3', 'registered_at': ts(2)},
    ]
    assert ids(order_for_display(donors)) == ['D2', 'D3', 'D1']


def test_ties_broken_by_identifier_ascending():
    donors = [
        {'id': 'D20', 'registered_at': ts(5)},
        {'id': 'D03', 'registered_at': ts(5)},
        {'id': 'D10', 'registered_at': ts(5)},
        {'id': 'D99', 'registered_at': ts(6)},
    ]
    assert ids(order_for_display(donors)) == ['D99', 'D03', 'D10', 'D20']


def test_identifier_order_is_lexicographic():
    donors = [{'id': 'D10', 'registered_at': ts(1)}, {'id': 'D9', 'registered_at': ts(1)}]
    assert ids(order_for_display(donors)) == ['D10', 'D9']


def test_missing_timestamp_sorts_last():
    donors = [
        {'id': 'D2', 'registered_at': None},
        {'id': 'D1'},
        {'id': 'D3', 'registered_at': ts(1)},
    ]
    assert ids(order_for_display(donors)) == ['D3', 'D1', 'D2']


def test_does_not_mutate_input():
    donors = [{'id': 'D1', 'registered_at': ts(1)}, {'id': 'D2', 'registered_at': ts(2)}]
    order_for_display(donors)
    assert ids(donors) == ['D1', 'D2']


def test_reads_created_at_and_donor_id():
    class Donor:
        def __init__(self, donor_id, created_at):
            self.donor_id = donor_id
            self.created_at = created_at

    donors = [Donor('B', ts(1)), Donor('A', ts(1)), Donor('C', ts(2))]
    assert [d.donor_id for d in order_for_display(donors)] == ['C', 'A', 'B']


def test_composes_with_compatibility_filter():
    candidates = [
        {'id': 'D1', 'blood_type': 'O-', 'registered_at': ts(1)},
        {'id': 'D2', 'blood_type': 'B+', 'registered_at': ts(9)},
        {'id': 'D3', 'blood_type': 'A-', 'registered_at': ts(4)},
    ]
    matches = filter_compatible_donors('A+', candidates)
    assert ids(order_for_display(matches)) == ['D3', 'D1']
