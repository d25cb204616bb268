import random

import pytest

from algorithms.blood_compatibility import BloodType, InvalidBloodTypeError
from donors.models import DonorProfile
from donors.utils import care_team_for, match_donors_for_receiver
from hospitals.models import City, Doctor, Hospital


@pytest.mark.django_db
class TestMatchDonorsForReceiver:

    def test_returns_compatible_available_donors_newest_first(self, make_donor, make_receiver):
        make_donor('D1', 'O-', days_ago=10)
        make_donor('D2', 'B+', days_ago=1)
        make_donor('D3', 'A-', days_ago=2)
        make_donor('D4', 'A+', days_ago=2)
        make_donor('D5', 'O+', days_ago=0, is_available=False)
        receiver = make_receiver('R1', 'A+')

        result = match_donors_for_receiver(receiver)

        assert [d.donor_id for d in result.donors] == ['D3', 'D4', 'D1']
        assert result.blood_type is BloodType.A_POS
        assert result.skipped == 0

    def test_no_candidates(self, make_receiver):
        result = match_donors_for_receiver(make_receiver('R1', 'AB+'))
        assert result.donors == []

    def test_corrupt_donor_rows_are_skipped(self, make_donor, make_receiver):
        make_donor('D1', 'O-')
        make_donor('D2', 'O-')
        # Bypasses model validation, like a bad bulk load would
        DonorProfile.objects.filter(pk='D2').update(blood_type='0-')

        result = match_donors_for_receiver(make_receiver('R1', 'O-'))

        assert [d.donor_id for d in result.donors] == ['D1']
        assert result.skipped == 1
        assert result.warnings[0].record.donor_id == 'D2'

    def test_corrupt_receiver_blood_type_raises(self, make_receiver):
        receiver = make_receiver('R1', 'A+')
        receiver.blood_type = 'A'
        with pytest.raises(InvalidBloodTypeError):
            match_donors_for_receiver(receiver)

    def test_explicit_candidates(self, make_receiver):
        candidates = [
            {'donor_id': 'X2', 'blood_type': 'B-', 'created_at': None},
            {'donor_id': 'X1', 'blood_type': 'O-', 'created_at': None},
        ]
        result = match_donors_for_receiver(make_receiver('R1', 'B-'), candidates=candidates)
        assert [d['donor_id'] for d in result.donors] == ['X1', 'X2']


@pytest.mark.django_db
class TestCareTeam:

    def test_prefers_hospitals_in_receiver_city(self, city, make_donor, make_receiver):
        other = City.objects.create(city_id='NYC', city_name='New York City')
        local = Hospital.objects.create(hospital_id='HDAL001', hospital_name='General Hospital - Dallas', city=city)
        Hospital.objects.create(hospital_id='HNYC001', hospital_name='General Hospital - NYC', city=other)
        doctor = Doctor.objects.create(doctor_id='DOC001', doctor_name='Dr. James Smith')
        local.doctors.add(doctor)

        make_donor('D1', 'O-')
        make_donor('D2', 'O+')
        result = match_donors_for_receiver(make_receiver('R1', 'O+', city=city))

        team = care_team_for(result, rng=random.Random(0))

        assert [row['donor'].donor_id for row in team] == [d.donor_id for d in result.donors]
        assert all(row['hospital'] == local for row in team)
        assert all(row['doctor'] == doctor for row in team)

    def test_no_hospitals(self, make_donor, make_receiver):
        make_donor('D1', 'O-')
        result = match_donors_for_receiver(make_receiver('R1', 'O-'))
        team = care_team_for(result)
        assert team[0]['hospital'] is None
        assert team[0]['doctor'] is None
