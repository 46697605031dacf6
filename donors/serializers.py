# donors/serializers.py
from rest_framework import serializers

from accounts.models import BLOOD_GROUP_CHOICES
from camps.models import BloodCamp
from .models import Donor, Donation

RH_UNSIGNED = {'A', 'B', 'AB', 'O'}


class BloodGroupField(serializers.ChoiceField):
    """
    Blood group from a query string or form. Case and surrounding space
    are ignored; a '+' that arrived form-decoded as a space is restored.
    """

    def __init__(self, **kwargs):
        super().__init__(choices=BLOOD_GROUP_CHOICES, **kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            raw = data.upper()
            stripped = raw.strip()
            if stripped in RH_UNSIGNED and raw.rstrip() != raw:
                data = stripped + '+'
            else:
                data = stripped
        return super().to_internal_value(data)


class LocationSerializer(serializers.Serializer):
    pincode = serializers.CharField(max_length=10)
    state = serializers.CharField(max_length=100)
    district = serializers.CharField(max_length=100)
    city = serializers.CharField(max_length=100)


class DonorSerializer(serializers.ModelSerializer):
    """
    Donor registration input and donor profile output, camelCased for the client.
    """
    id = serializers.CharField(source='pk', read_only=True)
    userId = serializers.CharField(source='user_id', read_only=True)
    donorName = serializers.CharField(source='donor_name', max_length=200)
    bloodGroup = serializers.ChoiceField(source='blood_group', choices=BLOOD_GROUP_CHOICES)
    dateOfBirth = serializers.DateField(source='date_of_birth')
    medicalConditions = serializers.ListField(
        source='medical_conditions', child=serializers.CharField(), required=False
    )
    emergencyContact = serializers.CharField(source='emergency_contact', max_length=200)
    emergencyContactPhone = serializers.CharField(source='emergency_contact_phone', max_length=20)
    location = LocationSerializer(source='*')
    consentBloodRequests = serializers.BooleanField(source='consent_blood_requests', required=False)
    registrationDate = serializers.DateTimeField(source='registration_date', read_only=True)
    isEligible = serializers.BooleanField(source='is_eligible', read_only=True)
    lastDonationDate = serializers.DateTimeField(source='last_donation_date', read_only=True)

    class Meta:
        model = Donor
        fields = [
            'id', 'userId', 'donorName', 'phone', 'bloodGroup', 'dateOfBirth',
            'weight', 'height', 'medicalConditions', 'medications',
            'emergencyContact', 'emergencyContactPhone', 'location',
            'consentBloodRequests', 'registrationDate', 'status', 'isEligible',
            'lastDonationDate',
        ]
        read_only_fields = ['status']

    def validate_donorName(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("This field may not be blank.")
        return value


class DonorSearchSerializer(serializers.Serializer):
    bloodType = BloodGroupField()
    pincode = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)


class DonationSerializer(serializers.ModelSerializer):
    """
    Records a donation (input) and renders a donation history row (output).
    """
    id = serializers.CharField(source='pk', read_only=True)
    donationDate = serializers.DateTimeField(source='donation_date', required=False)
    bloodType = serializers.ChoiceField(source='blood_group', choices=BLOOD_GROUP_CHOICES)
    units = serializers.IntegerField(min_value=1, required=False)
    bloodCampId = serializers.PrimaryKeyRelatedField(
        source='blood_camp', queryset=BloodCamp.objects.all(),
        required=False, allow_null=True, write_only=True
    )
    bloodCamp = serializers.SerializerMethodField()

    class Meta:
        model = Donation
        fields = [
            'id', 'donationDate', 'bloodType', 'units', 'location',
            'bloodCampId', 'bloodCamp', 'notes',
        ]

    def get_bloodCamp(self, obj):
        camp = obj.blood_camp
        if camp is None:
            return None
        return {
            'id': str(camp.pk),
            'campName': camp.camp_name,
            'location': camp.location,
        }
