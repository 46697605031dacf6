from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from django.conf import settings
import getpass

User = get_user_model()


class Command(BaseCommand):
    help = 'Create an administrator account, gated by SUPERUSER_SECRET_KEY'

    def handle(self, *args, **options):
        expected_secret = getattr(settings, 'SUPERUSER_SECRET_KEY', None)
        if not expected_secret:
            raise CommandError('SUPERUSER_SECRET_KEY is not configured.')

        secret = getpass.getpass('Enter SUPERUSER SECRET KEY: ')
        if secret != expected_secret:
            self.stdout.write(self.style.ERROR('Invalid secret key. Cannot create administrator.'))
            return

        email = input('Email: ').strip().lower()
        full_name = input('Full name: ').strip()
        password = getpass.getpass('Password: ')

        if User.objects.filter(email__iexact=email).exists():
            self.stdout.write(self.style.ERROR('User with this email already exists.'))
            return

        User.objects.create_superuser(
            email=email,
            password=password,
            full_name=full_name or email,
        )

        self.stdout.write(self.style.SUCCESS(f'Administrator {email} created successfully!'))
