from django.conf import settings
from django.db import models


class BloodCamp(models.Model):
    STATUS_CHOICES = [
        ('upcoming', 'Upcoming'),
        ('ongoing', 'Ongoing'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    camp_name = models.CharField(max_length=200)
    camp_date = models.DateTimeField()
    camp_time = models.CharField(max_length=50)
    location = models.CharField(max_length=255)
    state = models.CharField(max_length=100)
    district = models.CharField(max_length=100)
    organizer = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    contact_phone = models.CharField(max_length=20, blank=True)
    contact_email = models.EmailField(blank=True)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='upcoming')

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='blood_camps'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.camp_name} ({self.district}, {self.state})"

    class Meta:
        ordering = ['camp_date']
        verbose_name = 'Blood Camp'
        verbose_name_plural = 'Blood Camps'
        indexes = [
            models.Index(fields=['state', 'district', 'camp_date'], name='camp_state_district_date_idx'),
        ]
