# blood_requests/serializers.py
from rest_framework import serializers

from accounts.models import BLOOD_GROUP_CHOICES
from donors.serializers import LocationSerializer
from .models import BloodRequest


class BloodRequestSerializer(serializers.ModelSerializer):
    """
    Blood request input/output with client-facing field names
    """
    id = serializers.CharField(source='pk', read_only=True)
    userId = serializers.CharField(source='user_id', read_only=True)
    patientName = serializers.CharField(source='patient_name', max_length=200)
    patientAge = serializers.IntegerField(source='patient_age', min_value=0, max_value=120)
    bloodType = serializers.ChoiceField(source='blood_group', choices=BLOOD_GROUP_CHOICES)
    unitsNeeded = serializers.IntegerField(source='units_needed', min_value=1, max_value=10)
    hospitalName = serializers.CharField(source='hospital_name', max_length=200)
    urgencyLevel = serializers.ChoiceField(source='urgency_level', choices=BloodRequest.URGENCY_CHOICES)
    scheduledDate = serializers.DateTimeField(source='scheduled_date', required=False, allow_null=True)
    contactName = serializers.CharField(source='contact_name', max_length=200)
    contactPhone = serializers.CharField(source='contact_phone', max_length=20)
    location = LocationSerializer(source='*')
    requestDate = serializers.DateTimeField(source='request_date', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = BloodRequest
        fields = [
            'id', 'userId', 'patientName', 'patientAge', 'bloodType', 'unitsNeeded',
            'hospitalName', 'urgencyLevel', 'scheduledDate', 'contactName',
            'contactPhone', 'location', 'status', 'requestDate', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['status']


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BloodRequest.STATUS_CHOICES)

    def validate_status(self, value):
        blood_request = self.context['blood_request']
        if blood_request.is_terminal and value != blood_request.status:
            raise serializers.ValidationError(
                f"Request is already {blood_request.status} and can no longer change"
            )
        return value
