# blood_requests/tasks.py
"""
Celery tasks for the blood request lifecycle
"""
import logging

from celery import shared_task

from blood_requests.models import BloodRequest

logger = logging.getLogger(__name__)


@shared_task
def purge_fulfilled_request(blood_request_id):
    """
    Delete a request that is still fulfilled when the retention period ends
    """
    deleted, _ = BloodRequest.objects.filter(
        pk=blood_request_id,
        status=BloodRequest.STATUS_FULFILLED,
    ).delete()

    if deleted:
        logger.info("Purged fulfilled blood request %s", blood_request_id)
    return deleted
