# camps/serializers.py
from rest_framework import serializers

from .models import BloodCamp


class BloodCampSerializer(serializers.ModelSerializer):
    id = serializers.CharField(source='pk', read_only=True)
    campName = serializers.CharField(source='camp_name', max_length=200)
    campDate = serializers.DateTimeField(source='camp_date')
    campTime = serializers.CharField(source='camp_time', max_length=50)
    contactPhone = serializers.CharField(source='contact_phone', max_length=20, required=False, allow_blank=True)
    contactEmail = serializers.EmailField(source='contact_email', required=False, allow_blank=True)

    class Meta:
        model = BloodCamp
        fields = [
            'id', 'campName', 'campDate', 'campTime', 'location', 'state',
            'district', 'organizer', 'description', 'contactPhone',
            'contactEmail', 'status',
        ]
