from datetime import timedelta
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from donors.models import Donor, Donation

User = get_user_model()


DONOR_PAYLOAD = {
    'donorName': 'Asha Rai',
    'phone': '9800000000',
    'bloodGroup': 'O+',
    'dateOfBirth': '1990-06-15',
    'weight': 60,
    'height': 165,
    'emergencyContact': 'Ram Rai',
    'emergencyContactPhone': '9811111111',
    'location': {
        'pincode': '560001',
        'state': 'Karnataka',
        'district': 'Bangalore Urban',
        'city': 'Bangalore',
    },
    'consentBloodRequests': True,
}


def make_user(email, **extra):
    return User.objects.create_user(email=email, password='secret123', full_name=email.split('@')[0], **extra)


def make_donor(user, **overrides):
    fields = {
        'donor_name': user.full_name,
        'phone': '9800000000',
        'blood_group': 'O+',
        'weight': 60,
        'height': 165,
        'emergency_contact': 'Kin',
        'emergency_contact_phone': '9811111111',
        'pincode': '560001',
        'state': 'Karnataka',
        'district': 'Bangalore Urban',
        'city': 'Bangalore',
    }
    fields.update(overrides)
    return Donor.objects.create(user=user, **fields)


class DonorRegistrationTests(APITestCase):
    def setUp(self):
        self.user = make_user('asha@example.com')
        self.client.force_authenticate(user=self.user)

    def test_register_then_find_in_exact_tier(self):
        response = self.client.post('/api/donors/register', DONOR_PAYLOAD, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['donor']['status'], 'registered')

        self.user.refresh_from_db()
        self.assertTrue(self.user.is_registered_donor)
        self.assertEqual(self.user.donor_status, 'registered')
        self.assertEqual(self.user.pincode, '560001')

        self.client.force_authenticate(user=None)
        found = self.client.get('/api/donors/find', {'bloodType': 'O+', 'pincode': '560001'})

        self.assertEqual(found.status_code, status.HTTP_200_OK)
        self.assertEqual(found.data['count'], 1)
        self.assertEqual(found.data['donors'][0]['id'], response.data['donor']['id'])

    def test_register_twice_rejected(self):
        self.client.post('/api/donors/register', DONOR_PAYLOAD, format='json')

        response = self.client.post('/api/donors/register', DONOR_PAYLOAD, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'You are already registered as a donor')

    def test_concurrent_duplicate_registration_is_a_client_error(self):
        with mock.patch('donors.views.register_donor', side_effect=IntegrityError('UNIQUE constraint failed')):
            response = self.client.post('/api/donors/register', DONOR_PAYLOAD, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'success': False, 'message': 'You are already registered as a donor'})

    def test_register_validates_weight(self):
        response = self.client.post('/api/donors/register', {**DONOR_PAYLOAD, 'weight': 30}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('weight', [e['field'] for e in response.data['errors']])
        self.assertFalse(Donor.objects.exists())

    def test_cancel_registration_keeps_donation_history(self):
        donor = make_donor(self.user)
        Donation.objects.create(user=self.user, donor=donor, blood_group='O+')

        response = self.client.delete(f'/api/donors/cancel/{self.user.pk}')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Donor.objects.filter(user=self.user).exists())
        self.assertEqual(Donation.objects.filter(user=self.user).count(), 1)
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_registered_donor)
        self.assertEqual(self.user.donor_status, 'inactive')

    def test_cannot_cancel_someone_else(self):
        other = make_user('other@example.com')
        make_donor(other)

        response = self.client.delete(f'/api/donors/cancel/{other.pk}')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['message'], 'Access denied')
        self.assertTrue(Donor.objects.filter(user=other).exists())


class FindDonorsTests(APITestCase):
    url = '/api/donors/find'

    def test_blood_type_required(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['errors'], [{'field': 'bloodType', 'message': 'Blood type is required'}])

    def test_invalid_blood_type(self):
        response = self.client.get(self.url, {'bloodType': 'Q+'})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_no_matches_is_empty_not_error(self):
        response = self.client.get(self.url, {'bloodType': 'AB-'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['donors'], [])
        self.assertEqual(response.data['count'], 0)

    def test_plus_decoded_as_space_is_restored(self):
        make_donor(make_user('asha@example.com'))

        response = self.client.get(self.url, {'bloodType': 'O ', 'pincode': '560001'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['searchParams'], {'bloodType': 'O ', 'pincode': '560001'})

    def test_storage_error_is_a_server_error(self):
        with mock.patch('algorithms.matching.tier_queryset', side_effect=DatabaseError('database unavailable')):
            response = self.client.get(self.url, {'bloodType': 'O+'})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['message'], 'Server error')
        self.assertFalse(response.data['success'])

    def test_answering_tier_is_logged(self):
        make_donor(make_user('asha@example.com'))

        with self.assertLogs('donors.utils', level='DEBUG') as logs:
            self.client.get(self.url, {'bloodType': 'O+', 'pincode': '560001'})

        self.assertIn('answered by tier exact_locality with 1 donor(s)', '\n'.join(logs.output))

    def test_invalid_token_is_ignored(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

        response = self.client.get(self.url, {'bloodType': 'O+'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)


class EligibilityViewTests(APITestCase):
    def setUp(self):
        self.user = make_user('asha@example.com')
        self.client.force_authenticate(user=self.user)

    def url(self, user):
        return f'/api/donors/eligibility/{user.pk}'

    def test_recent_donor_cannot_donate(self):
        make_donor(self.user, last_donation_date=timezone.now() - timedelta(days=55))

        response = self.client.get(self.url(self.user))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['canDonate'])
        self.assertEqual(response.data['reason'], 'Last donation was less than 56 days ago')

    def test_donor_without_donations_can_donate(self):
        make_donor(self.user)

        response = self.client.get(self.url(self.user))

        self.assertEqual(response.data, {'success': True, 'canDonate': True, 'reason': None})

    def test_not_registered(self):
        response = self.client.get(self.url(self.user))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['canDonate'])
        self.assertEqual(response.data['reason'], 'Not registered as a donor')

    def test_other_account_forbidden(self):
        other = make_user('other@example.com')

        response = self.client.get(self.url(other))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_may_check_anyone(self):
        admin = make_user('admin@example.com', role='admin')
        make_donor(self.user)
        self.client.force_authenticate(user=admin)

        response = self.client.get(self.url(self.user))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['canDonate'])

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(self.url(self.user))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class DonationTests(APITestCase):
    url = '/api/donations'

    def setUp(self):
        self.user = make_user('asha@example.com')
        self.client.force_authenticate(user=self.user)

    def test_requires_donor_registration(self):
        response = self.client.post(self.url, {'bloodType': 'O+'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'You must be registered as a donor first')

    def test_records_donation_and_updates_flags(self):
        donor = make_donor(self.user)

        response = self.client.post(self.url, {'bloodType': 'O+', 'units': 1, 'location': 'City Hospital'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        donor.refresh_from_db()
        self.user.refresh_from_db()
        self.assertIsNotNone(donor.last_donation_date)
        self.assertTrue(self.user.has_successfully_donated)
        self.assertFalse(donor.can_donate)

    def test_backdated_donation_does_not_move_last_date_backwards(self):
        latest = timezone.now() - timedelta(days=3)
        donor = make_donor(self.user, last_donation_date=latest)

        older = (timezone.now() - timedelta(days=120)).isoformat()
        response = self.client.post(self.url, {'bloodType': 'O+', 'donationDate': older}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        donor.refresh_from_db()
        self.assertEqual(donor.last_donation_date, latest)

    def test_recording_is_atomic(self):
        make_donor(self.user)

        with mock.patch.object(Donor, 'save', side_effect=DatabaseError('disk full')):
            response = self.client.post(self.url, {'bloodType': 'O+'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['message'], 'Server error')
        self.assertFalse(Donation.objects.exists())
        self.user.refresh_from_db()
        self.assertFalse(self.user.has_successfully_donated)

    def test_history_newest_first(self):
        donor = make_donor(self.user)
        now = timezone.now()
        Donation.objects.create(user=self.user, donor=donor, blood_group='O+', donation_date=now - timedelta(days=200))
        Donation.objects.create(user=self.user, donor=donor, blood_group='O+', donation_date=now - timedelta(days=100))

        response = self.client.get(f'/api/donations/user/{self.user.pk}')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        dates = [d['donationDate'] for d in response.data['donations']]
        self.assertEqual(dates, sorted(dates, reverse=True))
        self.assertEqual(len(dates), 2)

    def test_history_of_other_account_forbidden(self):
        other = make_user('other@example.com')

        response = self.client.get(f'/api/donations/user/{other.pk}')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
