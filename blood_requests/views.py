import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.decorators import ensure_owner_or_admin, self_or_admin
from donors.utils import donor_search_payload
from .models import BloodRequest
from .serializers import BloodRequestSerializer, StatusUpdateSerializer

logger = logging.getLogger(__name__)


def _owned_request(request, pk):
    blood_request = get_object_or_404(BloodRequest, pk=pk)
    ensure_owner_or_admin(request.user, blood_request.user_id)
    return blood_request


# ============================================
# CREATE / LIST
# ============================================
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_request(request):
    serializer = BloodRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    blood_request = serializer.save(user=request.user)

    logger.info(
        "Blood request %s created by account %s (%s, %s)",
        blood_request.pk, request.user.pk, blood_request.blood_group, blood_request.urgency_level,
    )
    return Response({
        "success": True,
        "message": "Blood request submitted successfully",
        "requestId": str(blood_request.pk),
        "request": BloodRequestSerializer(blood_request).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@self_or_admin('user_id')
def user_requests(request, user_id):
    requests_qs = BloodRequest.objects.filter(user_id=user_id).order_by('-request_date', '-pk')
    return Response({
        "success": True,
        "requests": BloodRequestSerializer(requests_qs, many=True).data,
    })


# ============================================
# DETAIL / DELETE
# ============================================
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def request_detail(request, pk):
    blood_request = _owned_request(request, pk)

    if request.method == 'DELETE':
        blood_request.delete()
        logger.info("Blood request %s deleted by account %s", pk, request.user.pk)
        return Response({"success": True, "message": "Blood request deleted successfully"})

    return Response({"success": True, "request": BloodRequestSerializer(blood_request).data})


# ============================================
# STATUS
# ============================================
@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_status(request, pk):
    blood_request = _owned_request(request, pk)

    serializer = StatusUpdateSerializer(data=request.data, context={'blood_request': blood_request})
    serializer.is_valid(raise_exception=True)

    new_status = serializer.validated_data['status']
    if new_status != blood_request.status:
        previous = blood_request.status
        blood_request.status = new_status
        blood_request.save(update_fields=['status', 'updated_at'])
        logger.info("Blood request %s moved %s -> %s", pk, previous, new_status)

    return Response({
        "success": True,
        "message": f"Request marked as {new_status}",
        "request": BloodRequestSerializer(blood_request).data,
    })


# ============================================
# MATCHES
# ============================================
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def request_matches(request, pk):
    blood_request = _owned_request(request, pk)
    payload = donor_search_payload(
        blood_request.blood_group,
        blood_request.pincode,
        {'bloodType': blood_request.blood_group, 'pincode': blood_request.pincode},
    )
    return Response(payload)
