from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils import timezone

from accounts.models import BLOOD_GROUP_CHOICES


# ---------------------------
# Donor Profile
# ---------------------------
class Donor(models.Model):
    STATUS_CHOICES = [
        ('registered', 'Registered'),
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='donor_profile'
    )

    donor_name = models.CharField(max_length=200)
    phone = models.CharField(max_length=20, db_index=True)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    date_of_birth = models.DateField(null=True, blank=True)

    weight = models.FloatField(
        validators=[MinValueValidator(45), MaxValueValidator(200)]
    )
    height = models.FloatField(
        validators=[MinValueValidator(120), MaxValueValidator(250)]
    )
    medical_conditions = models.JSONField(default=list, blank=True)
    medications = models.TextField(blank=True)
    emergency_contact = models.CharField(max_length=200)
    emergency_contact_phone = models.CharField(max_length=20)

    # Locality
    pincode = models.CharField(max_length=10)
    state = models.CharField(max_length=100)
    district = models.CharField(max_length=100)
    city = models.CharField(max_length=100)

    consent_blood_requests = models.BooleanField(default=True)
    registration_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='registered')
    is_eligible = models.BooleanField(default=True)
    last_donation_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def can_donate(self) -> bool:
        """Donors can donate again once the deferral window has passed"""
        from algorithms.eligibility import can_donate
        return can_donate(self.last_donation_date)

    @property
    def location(self):
        return {
            'pincode': self.pincode,
            'state': self.state,
            'district': self.district,
            'city': self.city,
        }

    def __str__(self):
        return f"{self.donor_name} ({self.blood_group})"

    class Meta:
        verbose_name = "Donor"
        verbose_name_plural = "Donors"
        ordering = ['-registration_date']
        indexes = [
            models.Index(fields=['blood_group', 'pincode'], name='donor_group_pincode_idx'),
        ]


class Donation(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='donations'
    )
    # Kept when the donor registration is cancelled
    donor = models.ForeignKey(
        Donor,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='donations'
    )
    blood_camp = models.ForeignKey(
        'camps.BloodCamp',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='donations'
    )

    donation_date = models.DateTimeField(default=timezone.now)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    units = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    location = models.CharField(max_length=255, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user.email} | {self.donation_date:%Y-%m-%d}"

    class Meta:
        ordering = ['-donation_date']
        verbose_name = "Donation"
        verbose_name_plural = "Donations"
        indexes = [
            models.Index(fields=['user', '-donation_date'], name='donation_user_date_idx'),
        ]
