import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.decorators import self_or_admin
from algorithms.eligibility import check_eligibility
from donors.models import Donor, Donation
from donors.serializers import DonorSerializer, DonorSearchSerializer, DonationSerializer
from donors.utils import donor_search_payload, register_donor, cancel_donor_registration, record_donation

User = get_user_model()
logger = logging.getLogger(__name__)


# ============================================
# DONOR REGISTRATION
# ============================================
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def register(request):
    if Donor.objects.filter(user=request.user).exists():
        return Response(
            {"success": False, "message": "You are already registered as a donor"},
            status=status.HTTP_400_BAD_REQUEST
        )

    serializer = DonorSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        donor = register_donor(request.user, serializer)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same account
        logger.warning("Duplicate donor registration for account %s", request.user.pk)
        return Response(
            {"success": False, "message": "You are already registered as a donor"},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        "success": True,
        "message": "Donor registration successful",
        "donor": DonorSerializer(donor).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
@self_or_admin('user_id')
def cancel_registration(request, user_id):
    account = get_object_or_404(User, pk=user_id)
    cancel_donor_registration(account)
    return Response({"success": True, "message": "Donor registration cancelled successfully"})


# ============================================
# ELIGIBILITY
# ============================================
@api_view(['GET'])
@permission_classes([IsAuthenticated])
@self_or_admin('user_id')
def eligibility(request, user_id):
    donor = Donor.objects.filter(user_id=user_id).first()
    can_donate, reason = check_eligibility(donor)
    return Response({"success": True, "canDonate": can_donate, "reason": reason})


# ============================================
# FIND DONORS
# ============================================
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def find(request):
    """
    Public donor search by blood type and optional pincode
    """
    blood_type = request.query_params.get('bloodType')
    pincode = request.query_params.get('pincode')

    if not blood_type or not blood_type.strip():
        raise ValidationError({'bloodType': ["Blood type is required"]})

    serializer = DonorSearchSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)

    payload = donor_search_payload(
        serializer.validated_data['bloodType'],
        serializer.validated_data.get('pincode'),
        {'bloodType': blood_type, 'pincode': pincode},
    )
    return Response(payload)


# ============================================
# DONATIONS
# ============================================
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_donation(request):
    donor = Donor.objects.filter(user=request.user).first()
    if donor is None:
        return Response(
            {"success": False, "message": "You must be registered as a donor first"},
            status=status.HTTP_400_BAD_REQUEST
        )

    serializer = DonationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    donation = record_donation(request.user, donor, serializer)

    return Response({
        "success": True,
        "message": "Donation recorded successfully",
        "donation": DonationSerializer(donation).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@self_or_admin('user_id')
def donation_history(request, user_id):
    donations = Donation.objects.filter(user_id=user_id).select_related('blood_camp').order_by('-donation_date')
    return Response({
        "success": True,
        "donations": DonationSerializer(donations, many=True).data,
    })
