from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from blood_requests.models import BloodRequest
from donors.models import Donor

User = get_user_model()


REQUEST_PAYLOAD = {
    'patientName': 'Hari Thapa',
    'patientAge': 54,
    'bloodType': 'O+',
    'unitsNeeded': 2,
    'hospitalName': 'City Hospital',
    'urgencyLevel': 'critical',
    'contactName': 'Sita Thapa',
    'contactPhone': '9822222222',
    'location': {
        'pincode': '560001',
        'state': 'Karnataka',
        'district': 'Bangalore Urban',
        'city': 'Bangalore',
    },
}


def make_user(email, **extra):
    return User.objects.create_user(email=email, password='secret123', full_name=email.split('@')[0], **extra)


def make_request(user, **overrides):
    fields = {
        'patient_name': 'Hari Thapa',
        'patient_age': 54,
        'blood_group': 'O+',
        'units_needed': 2,
        'hospital_name': 'City Hospital',
        'urgency_level': 'high',
        'contact_name': 'Sita Thapa',
        'contact_phone': '9822222222',
        'pincode': '560001',
        'state': 'Karnataka',
        'district': 'Bangalore Urban',
        'city': 'Bangalore',
    }
    fields.update(overrides)
    return BloodRequest.objects.create(user=user, **fields)


class CreateBloodRequestTests(APITestCase):
    url = '/api/blood-requests'

    def setUp(self):
        self.user = make_user('sita@example.com')
        self.client.force_authenticate(user=self.user)

    def test_create(self):
        response = self.client.post(self.url, REQUEST_PAYLOAD, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        blood_request = BloodRequest.objects.get(pk=response.data['requestId'])
        self.assertEqual(blood_request.user, self.user)
        self.assertEqual(blood_request.status, 'pending')
        self.assertEqual(response.data['request']['location']['pincode'], '560001')

    def test_status_cannot_be_set_on_create(self):
        response = self.client.post(self.url, {**REQUEST_PAYLOAD, 'status': 'fulfilled'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['request']['status'], 'pending')

    def test_units_out_of_range(self):
        response = self.client.post(self.url, {**REQUEST_PAYLOAD, 'unitsNeeded': 11}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual([e['field'] for e in response.data['errors']], ['unitsNeeded'])

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.post(self.url, REQUEST_PAYLOAD, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class BloodRequestAccessTests(APITestCase):
    def setUp(self):
        self.owner = make_user('sita@example.com')
        self.stranger = make_user('stranger@example.com')
        self.admin = make_user('admin@example.com', role='admin')

    def test_user_requests_newest_first(self):
        now = timezone.now()
        old = make_request(self.owner, request_date=now - timedelta(days=2))
        new = make_request(self.owner, request_date=now)
        make_request(self.stranger)
        self.client.force_authenticate(user=self.owner)

        response = self.client.get(f'/api/blood-requests/user/{self.owner.pk}')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r['id'] for r in response.data['requests']], [str(new.pk), str(old.pk)])

    def test_user_requests_of_other_account_forbidden(self):
        self.client.force_authenticate(user=self.stranger)

        response = self.client.get(f'/api/blood-requests/user/{self.owner.pk}')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_detail_owner_and_admin_only(self):
        blood_request = make_request(self.owner)
        url = f'/api/blood-requests/{blood_request.pk}'

        self.client.force_authenticate(user=self.stranger)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.admin)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

    def test_missing_request(self):
        self.client.force_authenticate(user=self.owner)

        response = self.client.get('/api/blood-requests/9999')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data['success'])

    def test_delete(self):
        blood_request = make_request(self.owner)
        self.client.force_authenticate(user=self.owner)

        response = self.client.delete(f'/api/blood-requests/{blood_request.pk}')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(BloodRequest.objects.filter(pk=blood_request.pk).exists())

    def test_stranger_cannot_delete(self):
        blood_request = make_request(self.owner)
        self.client.force_authenticate(user=self.stranger)

        response = self.client.delete(f'/api/blood-requests/{blood_request.pk}')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(BloodRequest.objects.filter(pk=blood_request.pk).exists())


class BloodRequestStatusTests(APITestCase):
    def setUp(self):
        self.owner = make_user('sita@example.com')
        self.client.force_authenticate(user=self.owner)
        self.blood_request = make_request(self.owner)
        self.url = f'/api/blood-requests/{self.blood_request.pk}/status'

    def test_mark_fulfilled_is_retained(self):
        response = self.client.put(self.url, {'status': 'fulfilled'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.blood_request.refresh_from_db()
        self.assertEqual(self.blood_request.status, 'fulfilled')

    def test_terminal_status_cannot_change(self):
        self.client.put(self.url, {'status': 'cancelled'}, format='json')

        response = self.client.put(self.url, {'status': 'pending'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['errors'][0]['field'], 'status')
        self.blood_request.refresh_from_db()
        self.assertEqual(self.blood_request.status, 'cancelled')

    def test_fulfilled_cannot_become_cancelled(self):
        self.client.put(self.url, {'status': 'fulfilled'}, format='json')

        response = self.client.put(self.url, {'status': 'cancelled'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_status(self):
        response = self.client.put(self.url, {'status': 'lost'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class BloodRequestMatchesTests(APITestCase):
    def test_matches_use_request_blood_type_and_pincode(self):
        owner = make_user('sita@example.com')
        donor_user = make_user('asha@example.com')
        donor = Donor.objects.create(
            user=donor_user, donor_name='Asha', phone='9800000000', blood_group='O+',
            weight=60, height=165, emergency_contact='Kin', emergency_contact_phone='9811111111',
            pincode='560001', state='Karnataka', district='Bangalore Urban', city='Bangalore',
        )
        Donor.objects.create(
            user=make_user('bina@example.com'), donor_name='Bina', phone='9800000001', blood_group='A+',
            weight=60, height=165, emergency_contact='Kin', emergency_contact_phone='9811111111',
            pincode='560001', state='Karnataka', district='Bangalore Urban', city='Bangalore',
        )
        blood_request = make_request(owner)
        self.client.force_authenticate(user=owner)

        response = self.client.get(f'/api/blood-requests/{blood_request.pk}/matches')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['donors'][0]['id'], str(donor.pk))
        self.assertEqual(response.data['searchParams'], {'bloodType': 'O+', 'pincode': '560001'})
