import logging

from django.db import transaction
from django.utils import timezone

from algorithms.matching import search_donors
from .models import Donor

# Logger setup
logger = logging.getLogger(__name__)


def donor_search_payload(blood_group, pincode, search_params):
    """
    Response body shared by /donors/find and /blood-requests/<id>/matches.
    """
    tier, donors = search_donors(blood_group, pincode)
    logger.debug("Search %s/%s answered by tier %s with %d donor(s)", blood_group, pincode, tier, len(donors))
    return {
        'success': True,
        'donors': donors,
        'count': len(donors),
        'searchParams': search_params,
    }


@transaction.atomic
def register_donor(user, serializer):
    """
    Create the donor profile and mirror its state onto the account.
    """
    donor = serializer.save(user=user, registration_date=timezone.now())

    user.is_registered_donor = True
    user.donor_registration_date = donor.registration_date
    user.donor_status = 'registered'
    user.pincode = donor.pincode
    user.state = donor.state
    user.district = donor.district
    user.city = donor.city
    user.save(update_fields=[
        'is_registered_donor', 'donor_registration_date', 'donor_status',
        'pincode', 'state', 'district', 'city',
    ])

    logger.info("Account %s registered as donor %s (%s)", user.pk, donor.pk, donor.blood_group)
    return donor


@transaction.atomic
def cancel_donor_registration(user):
    deleted, _ = Donor.objects.filter(user=user).delete()

    user.is_registered_donor = False
    user.donor_status = 'inactive'
    user.save(update_fields=['is_registered_donor', 'donor_status'])

    logger.info("Account %s cancelled donor registration (removed=%s)", user.pk, deleted)
    return deleted


@transaction.atomic
def record_donation(user, donor, serializer):
    """
    Store the donation and advance the donor's last donation date and the
    account's donated flag in one transaction.
    """
    donation = serializer.save(user=user, donor=donor)

    if donor.last_donation_date is None or donation.donation_date > donor.last_donation_date:
        donor.last_donation_date = donation.donation_date
        donor.save(update_fields=['last_donation_date', 'updated_at'])

    if not user.has_successfully_donated:
        user.has_successfully_donated = True
        user.save(update_fields=['has_successfully_donated'])

    logger.info("Donation %s recorded for donor %s", donation.pk, donor.pk)
    return donation
