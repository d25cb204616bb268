import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from donors.models import DonorProfile
from hospitals.models import City

pytestmark = pytest.mark.django_db

CSV = """donor_id,full_name,age,sex,blood_type,phone,city_id,city_name,is_available
D1,Ana Perez,29,F,O-,555-0101,DAL,Dallas,true
D2,Ben Ortiz,45,m,AB+,555-0102,DAL,Dallas,false
D3,Cara Li,30,F,ab+,555-0103,,,true
D4,Dan Moe,16,M,A+,555-0104,,,true
,No Id,30,F,A+,,,,true
D5,Eve Stone,abc,F,B-,,,,true
D6,Finn Hale,50,M,,,,,true
"""


@pytest.fixture
def donor_csv(tmp_path):
    path = tmp_path / 'donors.csv'
    path.write_text(CSV)
    return path


def test_import_creates_valid_rows_and_skips_the_rest(donor_csv, capsys):
    call_command('import_donors', str(donor_csv))

    assert sorted(DonorProfile.objects.values_list('donor_id', flat=True)) == ['D1', 'D2']
    d2 = DonorProfile.objects.get(pk='D2')
    assert d2.sex == 'M'
    assert d2.blood_type == 'AB+'
    assert d2.is_available is False
    assert d2.city.city_name == 'Dallas'
    assert City.objects.count() == 1

    out = capsys.readouterr().out
    assert 'Created: 2, Updated: 0, Skipped: 5' in out
    assert 'Skipping row 4' in out


def test_import_updates_existing_donors(donor_csv, make_donor, capsys):
    make_donor('D1', 'A+', full_name='Old Name')

    call_command('import_donors', str(donor_csv))

    d1 = DonorProfile.objects.get(pk='D1')
    assert d1.full_name == 'Ana Perez'
    assert d1.blood_type == 'O-'
    assert 'Created: 1, Updated: 1' in capsys.readouterr().out


def test_missing_file(tmp_path):
    with pytest.raises(CommandError):
        call_command('import_donors', str(tmp_path / 'nope.csv'))


def test_unconvertible_age_skips_only_that_row(tmp_path, capsys):
    path = tmp_path / 'donors.csv'
    path.write_text(
        "donor_id,full_name,blood_type,age\n"
        "D1,Ann,O-,30\n"
        "D2,Bob,A+,inf\n"
        "D3,Cy,B+,1e400\n"
    )

    call_command('import_donors', str(path))

    assert list(DonorProfile.objects.values_list('donor_id', flat=True)) == ['D1']
    out = capsys.readouterr().out
    assert 'Skipping row 3: invalid age' in out
    assert 'Created: 1, Updated: 0, Skipped: 2' in out
