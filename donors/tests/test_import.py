import os
import shutil
import tempfile
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from donors.models import Donor

User = get_user_model()

HEADER = 'donor_name,email,phone,blood_group,pincode,state,district,city,date_of_birth,weight,height,consent_blood_requests\n'


class ImportDonorsCommandTests(TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmpdir)

    def write_csv(self, rows):
        path = os.path.join(self.tmpdir, 'donors.csv')
        with open(path, 'w', encoding='utf-8') as fh:
            fh.write(HEADER)
            fh.writelines(rows)
        return path

    def test_imports_valid_rows_and_skips_bad_ones(self):
        path = self.write_csv([
            'Asha Rai,Asha@Example.com,9800000000,o+,560001,Karnataka,Bangalore Urban,Bangalore,1990-06-15,62,165,yes\n',
            'Bad Group,bad@example.com,9800000001,Q+,560001,Karnataka,Bangalore Urban,Bangalore,,,,\n',
            'Short Pin,short@example.com,9800000002,A+,5600,Karnataka,Bangalore Urban,Bangalore,,,,\n',
        ])
        out = StringIO()

        call_command('import_donors', path, stdout=out)

        self.assertIn('Created: 1, Updated: 0, Skipped: 2', out.getvalue())
        donor = Donor.objects.get()
        self.assertEqual(donor.blood_group, 'O+')
        self.assertEqual(donor.pincode, '560001')
        self.assertEqual(donor.date_of_birth.isoformat(), '1990-06-15')
        self.assertTrue(donor.consent_blood_requests)
        self.assertEqual(donor.user.email, 'asha@example.com')
        self.assertTrue(donor.user.is_registered_donor)
        self.assertFalse(donor.user.has_usable_password())
        self.assertFalse(User.objects.filter(email='bad@example.com').exists())

    def test_reimport_updates_existing_donor(self):
        row = 'Asha Rai,asha@example.com,9800000000,O+,560001,Karnataka,Bangalore Urban,Bangalore,,60,165,no\n'
        path = self.write_csv([row])
        call_command('import_donors', path, stdout=StringIO())

        path = self.write_csv([row.replace('560001', '560002')])
        out = StringIO()
        call_command('import_donors', path, stdout=out)

        self.assertIn('Created: 0, Updated: 1, Skipped: 0', out.getvalue())
        donor = Donor.objects.get()
        self.assertEqual(donor.pincode, '560002')
        self.assertFalse(donor.consent_blood_requests)

    def test_default_password(self):
        path = self.write_csv([
            'Asha Rai,asha@example.com,9800000000,O+,560001,Karnataka,Bangalore Urban,Bangalore,,,,\n',
        ])

        call_command('import_donors', path, '--default-password', 'changeme1', stdout=StringIO())

        self.assertTrue(User.objects.get(email='asha@example.com').check_password('changeme1'))

    def test_missing_columns(self):
        path = os.path.join(self.tmpdir, 'partial.csv')
        with open(path, 'w', encoding='utf-8') as fh:
            fh.write('donor_name,email\nAsha,asha@example.com\n')

        with self.assertRaises(CommandError):
            call_command('import_donors', path, stdout=StringIO())

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command('import_donors', os.path.join(self.tmpdir, 'nope.csv'), stdout=StringIO())
