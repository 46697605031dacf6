"""
Donation eligibility: the deferral window between successive donations
"""
import logging
from datetime import timedelta

from django.utils import timezone

# Constants
DEFERRAL_DAYS = 56
DEFERRAL_WINDOW = timedelta(days=DEFERRAL_DAYS)

NOT_REGISTERED_REASON = 'Not registered as a donor'
DEFERRAL_REASON = f'Last donation was less than {DEFERRAL_DAYS} days ago'

# Logger
logger = logging.getLogger(__name__)


def can_donate(last_donation_date, now=None) -> bool:
    """
    True when no donation is on record, or the last one is at least
    DEFERRAL_WINDOW in the past.

    Args:
        last_donation_date (datetime | None): Donor's last donation timestamp
        now (datetime | None): Reference time, defaults to timezone.now()

    Returns:
        bool
    """
    if last_donation_date is None:
        return True
    now = now or timezone.now()
    return now - last_donation_date >= DEFERRAL_WINDOW


def next_eligible_date(last_donation_date):
    if last_donation_date is None:
        return None
    return last_donation_date + DEFERRAL_WINDOW


def check_eligibility(donor, now=None):
    """
    Decide whether `donor` may donate right now.

    Args:
        donor (Donor | None): Donor profile, or None when the account never registered
        now (datetime | None): Reference time

    Returns:
        tuple: (can_donate: bool, reason: str | None)
    """
    if donor is None:
        return False, NOT_REGISTERED_REASON

    eligible = can_donate(donor.last_donation_date, now=now)
    if not eligible:
        logger.debug("Donor %s inside deferral window until %s",
                     donor.pk, next_eligible_date(donor.last_donation_date))
        return False, DEFERRAL_REASON
    return True, None
