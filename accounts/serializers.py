# accounts/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import BLOOD_GROUP_CHOICES, CustomUser

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Public account representation, camelCased for the client.
    """
    uid = serializers.SerializerMethodField()
    fullName = serializers.CharField(source='full_name')
    displayName = serializers.CharField(source='display_name')
    dob = serializers.DateField(source='date_of_birth')
    bloodType = serializers.CharField(source='blood_group')
    medicalConditions = serializers.JSONField(source='medical_conditions')
    emergencyContact = serializers.CharField(source='emergency_contact')
    emergencyContactPhone = serializers.CharField(source='emergency_contact_phone')
    consentBloodRequests = serializers.BooleanField(source='consent_blood_requests')
    isRegisteredDonor = serializers.BooleanField(source='is_registered_donor')
    donorRegistrationDate = serializers.DateTimeField(source='donor_registration_date')
    donorStatus = serializers.CharField(source='donor_status')
    hasSuccessfullyDonated = serializers.BooleanField(source='has_successfully_donated')
    createdAt = serializers.DateTimeField(source='date_joined')
    lastLoginAt = serializers.DateTimeField(source='last_login')

    class Meta:
        model = User
        fields = [
            'uid', 'email', 'fullName', 'displayName', 'phone', 'dob', 'gender',
            'bloodType', 'pincode', 'state', 'district', 'city', 'weight', 'height',
            'medicalConditions', 'emergencyContact', 'emergencyContactPhone',
            'consentBloodRequests', 'isRegisteredDonor', 'donorRegistrationDate',
            'donorStatus', 'hasSuccessfullyDonated', 'role', 'createdAt', 'lastLoginAt',
        ]

    def get_uid(self, obj):
        return str(obj.pk)


class SignupSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    fullName = serializers.CharField(max_length=200)
    displayName = serializers.CharField(max_length=200, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    dob = serializers.DateField(required=False, allow_null=True)
    gender = serializers.ChoiceField(choices=CustomUser.GENDER_CHOICES, required=False, allow_blank=True)
    bloodType = serializers.ChoiceField(choices=BLOOD_GROUP_CHOICES, required=False, allow_blank=True)

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already exists")
        return value

    def validate_fullName(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("This field may not be blank.")
        return value

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            full_name=validated_data['fullName'],
            display_name=validated_data.get('displayName') or validated_data['fullName'],
            phone=validated_data.get('phone', ''),
            date_of_birth=validated_data.get('dob'),
            gender=validated_data.get('gender', ''),
            blood_group=validated_data.get('bloodType', ''),
        )


class SigninSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """
    Whitelisted profile fields a user may change about themselves.
    """
    fullName = serializers.CharField(source='full_name', max_length=200, required=False)
    displayName = serializers.CharField(source='display_name', max_length=200, required=False, allow_blank=True)
    dob = serializers.DateField(source='date_of_birth', required=False, allow_null=True)
    bloodType = serializers.ChoiceField(source='blood_group', choices=BLOOD_GROUP_CHOICES, required=False, allow_blank=True)
    medicalConditions = serializers.ListField(
        source='medical_conditions', child=serializers.CharField(), required=False
    )
    emergencyContact = serializers.CharField(source='emergency_contact', required=False, allow_blank=True)
    emergencyContactPhone = serializers.CharField(source='emergency_contact_phone', required=False, allow_blank=True)
    consentBloodRequests = serializers.BooleanField(source='consent_blood_requests', required=False)

    class Meta:
        model = User
        fields = [
            'fullName', 'displayName', 'phone', 'dob', 'gender', 'bloodType',
            'pincode', 'state', 'district', 'city', 'weight', 'height',
            'medicalConditions', 'emergencyContact', 'emergencyContactPhone',
            'consentBloodRequests',
        ]
