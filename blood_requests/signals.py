# blood_requests/signals.py
"""
Schedule the purge of fulfilled requests when a retention period is configured
"""
import logging

from django.conf import settings
from django.db import transaction
from django.db.models.signals import pre_save, post_save
from django.dispatch import receiver

from blood_requests.models import BloodRequest
from blood_requests.tasks import purge_fulfilled_request

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=BloodRequest)
def remember_previous_status(sender, instance, **kwargs):
    if instance.pk is None:
        instance._previous_status = None
        return
    instance._previous_status = (
        BloodRequest.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
    )


@receiver(post_save, sender=BloodRequest)
def schedule_fulfilled_purge(sender, instance, created, **kwargs):
    retention = getattr(settings, 'FULFILLED_REQUEST_RETENTION_SECONDS', None)
    if retention is None:
        return
    if instance.status != BloodRequest.STATUS_FULFILLED:
        return
    if getattr(instance, '_previous_status', None) == BloodRequest.STATUS_FULFILLED:
        return

    transaction.on_commit(
        lambda: purge_fulfilled_request.apply_async(args=[instance.pk], countdown=retention)
    )
    logger.info("Blood request %s fulfilled; purge scheduled in %ss", instance.pk, retention)
