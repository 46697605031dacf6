# camps/tasks.py
"""
Celery tasks keeping camp statuses in step with the calendar
"""
import logging

from celery import shared_task
from django.utils import timezone

from camps.models import BloodCamp

logger = logging.getLogger(__name__)


@shared_task
def refresh_camp_statuses():
    """
    Upcoming camps dated today become ongoing; upcoming or ongoing camps
    dated before today become completed. Cancelled camps are left alone.
    """
    today = timezone.localdate()

    started = BloodCamp.objects.filter(
        status='upcoming',
        camp_date__date=today,
    ).update(status='ongoing')

    completed = BloodCamp.objects.filter(
        status__in=['upcoming', 'ongoing'],
        camp_date__date__lt=today,
    ).update(status='completed')

    if started or completed:
        logger.info("Camp statuses refreshed: %s started, %s completed", started, completed)
    return {'started': started, 'completed': completed}
