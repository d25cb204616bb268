# donors/management/commands/import_donors.py
"""
Django management command to import donor data from CSV or Excel
Usage: python manage.py import_donors path/to/donors.xlsx
"""
from pathlib import Path

import pandas as pd
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from algorithms.blood_compatibility import BloodType, InvalidBloodTypeError
from donors.models import DonorProfile, SEX_CHOICES
from hospitals.models import City

MIN_AGE = 18
MAX_AGE = 65
VALID_SEXES = {code for code, _ in SEX_CHOICES}


def read_table(path):
    if Path(path).suffix.lower() == '.csv':
        return pd.read_csv(path, dtype=str)
    return pd.read_excel(path, dtype=str)


def cell(row, *names, default=''):
    """First non-empty value among the given column names"""
    for name in names:
        value = row.get(name)
        if value is not None and not pd.isna(value) and str(value).strip() != '':
            return str(value).strip()
    return default


class Command(BaseCommand):
    help = 'Import donors from a CSV or Excel file (upsert by donor_id)'

    def add_arguments(self, parser):
        parser.add_argument('donor_file', type=str, help='Path to the .csv/.xlsx file')

    def handle(self, *args, **options):
        donor_file = options['donor_file']
        if not Path(donor_file).exists():
            raise CommandError(f'File not found: {donor_file}')

        self.stdout.write(self.style.WARNING(f'Starting import from {donor_file}...'))

        df = read_table(donor_file)
        self.stdout.write(f'Found {len(df)} rows')

        imported_count = 0
        updated_count = 0
        skipped_count = 0

        with transaction.atomic():
            for index, row in df.iterrows():
                line = index + 2  # header is line 1
                try:
                    defaults = self.parse_row(row)
                except ValueError as e:
                    skipped_count += 1
                    self.stdout.write(self.style.WARNING(f'Skipping row {line}: {e}'))
                    continue

                donor, created = DonorProfile.objects.update_or_create(
                    donor_id=defaults.pop('donor_id'),
                    defaults=defaults,
                )
                if created:
                    imported_count += 1
                    self.stdout.write(f'Created: {donor.full_name} ({donor.blood_type})')
                else:
                    updated_count += 1
                    self.stdout.write(f'Updated: {donor.full_name} ({donor.blood_type})')

        self.stdout.write(
            self.style.SUCCESS(
                f'Import complete! Created: {imported_count}, '
                f'Updated: {updated_count}, Skipped: {skipped_count}'
            )
        )

    def parse_row(self, row):
        """Validate one row; raises ValueError with a reason to skip it"""
        donor_id = cell(row, 'donor_id', 'id')
        full_name = cell(row, 'full_name', 'donor_name', 'name')
        if not donor_id:
            raise ValueError('missing donor_id')
        if not full_name:
            raise ValueError('missing name')

        try:
            blood_type = BloodType.parse(cell(row, 'blood_type', 'blood_group', default=None))
        except InvalidBloodTypeError as e:
            raise ValueError(str(e)) from e

        try:
            age = int(float(cell(row, 'age')))
        except (ValueError, OverflowError):
            raise ValueError('invalid age')
        if age < MIN_AGE or age > MAX_AGE:
            raise ValueError(f'age {age} out of range ({MIN_AGE}-{MAX_AGE})')

        sex = cell(row, 'sex', default='O').upper()[:1]
        if sex not in VALID_SEXES:
            raise ValueError(f'invalid sex {sex!r}')

        city = None
        city_id = cell(row, 'city_id')
        if city_id:
            city, _ = City.objects.get_or_create(
                city_id=city_id,
                defaults={'city_name': cell(row, 'city_name', 'city', default=city_id)},
            )

        return {
            'donor_id': donor_id,
            'full_name': full_name,
            'age': age,
            'sex': sex,
            'blood_type': blood_type.value,
            'phone': cell(row, 'phone', 'phone_number'),
            'city': city,
            'is_available': cell(row, 'is_available', default='true').lower() in ('1', 'true', 'yes'),
        }
