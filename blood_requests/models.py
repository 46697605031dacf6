# blood_requests/models.py
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone

from accounts.models import BLOOD_GROUP_CHOICES


class BloodRequest(models.Model):
    URGENCY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('critical', 'Critical - Life Threatening'),
    ]

    STATUS_PENDING = 'pending'
    STATUS_FULFILLED = 'fulfilled'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_FULFILLED, 'Fulfilled'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    TERMINAL_STATUSES = (STATUS_FULFILLED, STATUS_CANCELLED)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='blood_requests')

    patient_name = models.CharField(max_length=200)
    patient_age = models.PositiveIntegerField(validators=[MaxValueValidator(120)])
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    units_needed = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1), MaxValueValidator(10)])
    hospital_name = models.CharField(max_length=200)
    urgency_level = models.CharField(max_length=10, choices=URGENCY_CHOICES)
    scheduled_date = models.DateTimeField(null=True, blank=True)

    contact_name = models.CharField(max_length=200)
    contact_phone = models.CharField(max_length=20)

    # Locality
    pincode = models.CharField(max_length=10)
    state = models.CharField(max_length=100)
    district = models.CharField(max_length=100)
    city = models.CharField(max_length=100)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    request_date = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.hospital_name} - {self.blood_group} ({self.urgency_level})"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    @property
    def hours_waiting(self):
        """How many hours this request has been open"""
        delta = timezone.now() - self.request_date
        return delta.total_seconds() / 3600

    class Meta:
        ordering = ['-request_date']
        verbose_name = 'Blood Request'
        verbose_name_plural = 'Blood Requests'
        indexes = [
            models.Index(fields=['blood_group', 'pincode', 'status'], name='request_group_pin_status_idx'),
            models.Index(fields=['user'], name='request_user_idx'),
        ]
