from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.utils import timezone

BLOOD_GROUP_CHOICES = [
    ('A+', 'A+'), ('A-', 'A-'),
    ('B+', 'B+'), ('B-', 'B-'),
    ('O+', 'O+'), ('O-', 'O-'),
    ('AB+', 'AB+'), ('AB-', 'AB-'),
]


class CustomUserManager(UserManager):
    """Accounts are addressed by email; the username mirrors it."""

    def create_user(self, email=None, password=None, **extra_fields):
        email = self.normalize_email(email).lower()
        extra_fields.setdefault('username', email)
        return super().create_user(email=email, password=password, **extra_fields)

    def create_superuser(self, email=None, password=None, **extra_fields):
        email = self.normalize_email(email).lower()
        extra_fields.setdefault('username', email)
        extra_fields.setdefault('role', CustomUser.ROLE_ADMIN)
        return super().create_superuser(email=email, password=password, **extra_fields)


class CustomUser(AbstractUser):
    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = (
        (ROLE_USER, 'User'),
        (ROLE_ADMIN, 'Admin'),
    )

    GENDER_CHOICES = (
        ('male', 'Male'),
        ('female', 'Female'),
        ('other', 'Other'),
        ('prefer-not-to-say', 'Prefer not to say'),
    )

    DONOR_STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('registered', 'Registered'),
        ('inactive', 'Inactive'),
    )

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER)

    full_name = models.CharField(max_length=200)
    display_name = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=20, choices=GENDER_CHOICES, blank=True)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES, blank=True)

    # Locality
    pincode = models.CharField(max_length=10, blank=True)
    state = models.CharField(max_length=100, blank=True)
    district = models.CharField(max_length=100, blank=True)
    city = models.CharField(max_length=100, blank=True)

    # Health info (optional)
    weight = models.FloatField(null=True, blank=True)
    height = models.FloatField(null=True, blank=True)
    medical_conditions = models.JSONField(default=list, blank=True)
    emergency_contact = models.CharField(max_length=200, blank=True)
    emergency_contact_phone = models.CharField(max_length=20, blank=True)

    # Donor flags mirrored from the donor profile
    consent_blood_requests = models.BooleanField(default=False)
    is_registered_donor = models.BooleanField(default=False)
    donor_registration_date = models.DateTimeField(null=True, blank=True)
    donor_status = models.CharField(max_length=15, choices=DONOR_STATUS_CHOICES, default='pending')
    has_successfully_donated = models.BooleanField(default=False)

    failed_attempts = models.PositiveIntegerField(default=0)
    is_locked = models.BooleanField(default=False)

    objects = CustomUserManager()

    REQUIRED_FIELDS = ['email']

    def __str__(self):
        return f"{self.email} ({self.role})"

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def record_signin(self):
        self.failed_attempts = 0
        self.last_login = timezone.now()
        self.save(update_fields=['failed_attempts', 'last_login'])
