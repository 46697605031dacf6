from django.contrib.auth import authenticate, get_user_model
from django.test import TestCase

User = get_user_model()


class EmailBackendTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email='asha@example.com', password='secret123', full_name='Asha')

    def test_email_is_case_insensitive(self):
        self.assertEqual(authenticate(username='ASHA@example.com', password='secret123'), self.user)

    def test_email_keyword(self):
        self.assertEqual(authenticate(email='asha@example.com', password='secret123'), self.user)

    def test_wrong_password(self):
        self.assertIsNone(authenticate(username='asha@example.com', password='wrong123'))

    def test_unknown_account(self):
        self.assertIsNone(authenticate(username='nobody@example.com', password='secret123'))

    def test_locked_account_rejected(self):
        self.user.is_locked = True
        self.user.save(update_fields=['is_locked'])

        self.assertIsNone(authenticate(username='asha@example.com', password='secret123'))
