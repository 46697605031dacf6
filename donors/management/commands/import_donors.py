# donors/management/commands/import_donors.py
"""
Django management command to import donors from a spreadsheet
Usage: python manage.py import_donors path/to/donors.xlsx [--default-password ...]
"""

from datetime import timezone as dt_timezone

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone
import pandas as pd

from accounts.models import BLOOD_GROUP_CHOICES
from donors.models import Donor

User = get_user_model()

VALID_BLOOD_GROUPS = {code for code, _ in BLOOD_GROUP_CHOICES}
VALID_STATUSES = {code for code, _ in Donor.STATUS_CHOICES}
REQUIRED_COLUMNS = ['donor_name', 'email', 'phone', 'blood_group', 'pincode', 'state', 'district', 'city']
TRUTHY = {'1', 'true', 'yes', 'y'}


def _text(row, column, default=''):
    value = row.get(column, default)
    if pd.isna(value):
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _number(row, column, default=None):
    value = row.get(column)
    if value is None or pd.isna(value):
        return default
    return float(value)


def _timestamp(row, column):
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    parsed = pd.to_datetime(value).to_pydatetime()
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def _read_frame(path):
    if path.lower().endswith('.csv'):
        return pd.read_csv(path, dtype={'pincode': str, 'phone': str})
    return pd.read_excel(path, dtype={'pincode': str, 'phone': str})


class Command(BaseCommand):
    help = 'Import donors from a CSV or Excel file'

    def add_arguments(self, parser):
        parser.add_argument('path', type=str, help='Path to the .csv/.xlsx file')
        parser.add_argument(
            '--default-password',
            default=None,
            help='Password for newly created accounts (unusable password when omitted)',
        )

    def handle(self, *args, **options):
        path = options['path']
        default_password = options['default_password']

        self.stdout.write(self.style.WARNING(f'Starting import from {path}...'))

        try:
            df = _read_frame(path)
        except FileNotFoundError:
            raise CommandError(f'File not found: {path}')

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise CommandError(f'Missing required columns: {", ".join(missing)}')

        self.stdout.write(f'Found {len(df)} rows in {path}')

        imported_count = 0
        updated_count = 0
        skipped_count = 0

        for index, row in df.iterrows():
            line = index + 2  # header is line 1
            try:
                with transaction.atomic():
                    created = self._import_row(row, default_password)
            except (ValueError, TypeError, ValidationError, IntegrityError) as e:
                skipped_count += 1
                self.stdout.write(self.style.ERROR(f'✗ Row {line}: {e}'))
                continue

            if created:
                imported_count += 1
            else:
                updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f'Import complete! Created: {imported_count}, '
                f'Updated: {updated_count}, Skipped: {skipped_count}'
            )
        )

    def _import_row(self, row, default_password):
        email = _text(row, 'email').lower()
        donor_name = _text(row, 'donor_name')
        blood_group = _text(row, 'blood_group').upper()
        pincode = _text(row, 'pincode')

        if not email or not donor_name:
            raise ValueError('email and donor_name are required')
        if blood_group not in VALID_BLOOD_GROUPS:
            raise ValueError(f'invalid blood group {blood_group!r}')
        if len(pincode) != 6:
            raise ValueError(f'invalid pincode {pincode!r}')

        status = _text(row, 'status', 'registered').lower() or 'registered'
        if status not in VALID_STATUSES:
            raise ValueError(f'invalid status {status!r}')

        consent = _text(row, 'consent_blood_requests', 'true').lower() in TRUTHY

        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            # A None password leaves the account with an unusable password
            user = User.objects.create_user(email=email, password=default_password, full_name=donor_name)

        date_of_birth = _timestamp(row, 'date_of_birth')

        donor, created = Donor.objects.update_or_create(
            user=user,
            defaults={
                'donor_name': donor_name,
                'phone': _text(row, 'phone'),
                'blood_group': blood_group,
                'date_of_birth': date_of_birth.date() if date_of_birth else None,
                'weight': _number(row, 'weight', 60),
                'height': _number(row, 'height', 165),
                'emergency_contact': _text(row, 'emergency_contact'),
                'emergency_contact_phone': _text(row, 'emergency_contact_phone'),
                'pincode': pincode,
                'state': _text(row, 'state'),
                'district': _text(row, 'district'),
                'city': _text(row, 'city'),
                'consent_blood_requests': consent,
                'status': status,
                'last_donation_date': _timestamp(row, 'last_donation_date'),
            }
        )
        donor.full_clean(exclude=['emergency_contact', 'emergency_contact_phone'])

        user.is_registered_donor = True
        user.donor_status = 'inactive' if status == 'inactive' else 'registered'
        user.donor_registration_date = user.donor_registration_date or donor.registration_date
        user.save(update_fields=['is_registered_donor', 'donor_status', 'donor_registration_date'])

        verb = 'Created' if created else 'Updated'
        self.stdout.write(f'{verb}: {donor.donor_name} ({donor.blood_group}) - {user.email}')
        return created
