# camps/views.py
import logging

from rest_framework import status, viewsets
from rest_framework.response import Response

from accounts.permissions import IsAdminRoleOrReadOnly
from .models import BloodCamp
from .serializers import BloodCampSerializer

logger = logging.getLogger(__name__)

LISTED_STATUSES = ('upcoming', 'ongoing')


class BloodCampViewSet(viewsets.ModelViewSet):
    """Blood camp listings; public reads, admin-only writes"""
    queryset = BloodCamp.objects.all().order_by('camp_date')
    serializer_class = BloodCampSerializer
    permission_classes = [IsAdminRoleOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        queryset = queryset.filter(status__in=LISTED_STATUSES)
        state = self.request.query_params.get('state')
        district = self.request.query_params.get('district')
        if state:
            queryset = queryset.filter(state=state)
        if district:
            queryset = queryset.filter(district=district)
        return queryset

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'success': True, 'camps': serializer.data})

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return Response({'success': True, 'camp': serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        camp = serializer.save(created_by=request.user)
        logger.info("Blood camp %s created by %s", camp.pk, request.user.pk)
        return Response(
            {'success': True, 'message': 'Blood camp created successfully', 'camp': serializer.data},
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', True)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({'success': True, 'message': 'Blood camp updated successfully', 'camp': serializer.data})

    def destroy(self, request, *args, **kwargs):
        camp = self.get_object()
        camp.delete()
        logger.info("Blood camp %s deleted by %s", kwargs.get('pk'), request.user.pk)
        return Response({'success': True, 'message': 'Blood camp deleted successfully'})
