"""
Donor matching: the filter-relaxation ladder.

Each tier is a (name, predicate, limit) entry. Tiers are evaluated in order
and the first one that returns at least one donor wins. Later tiers trade
precision for recall so that a blood request is never left with an empty
list while compatible donors exist.
"""
import logging
from collections import namedtuple

from django.db.models import Case, IntegerField, Q, Value, When
from django.utils import timezone

from donors.models import Donor

# Constants
ACTIVE_STATUSES = ('registered', 'active')
DONOR_SEARCH_LIMIT = 50
PINCODE_LENGTH = 6

# Logger
logger = logging.getLogger(__name__)

Tier = namedtuple('Tier', ['name', 'predicate', 'limit', 'needs_pincode'])


def _exact_locality(blood_group, pincode):
    return Q(
        blood_group=blood_group,
        pincode=pincode,
        consent_blood_requests=True,
        status__in=ACTIVE_STATUSES,
        is_eligible=True,
    )


def _blood_group_and_status(blood_group, pincode):
    return Q(blood_group=blood_group, status__in=ACTIVE_STATUSES)


def _blood_group_only(blood_group, pincode):
    return Q(blood_group=blood_group)


def _blood_group_and_consent(blood_group, pincode):
    # Never yields donors while _blood_group_only runs before it.
    return Q(blood_group=blood_group, consent_blood_requests=True, status__in=ACTIVE_STATUSES)


MATCH_LADDER = (
    Tier('exact_locality', _exact_locality, None, True),
    Tier('blood_group_status', _blood_group_and_status, DONOR_SEARCH_LIMIT, False),
    Tier('blood_group_only', _blood_group_only, DONOR_SEARCH_LIMIT, False),
    Tier('blood_group_consent', _blood_group_and_consent, DONOR_SEARCH_LIMIT, False),
)


def normalize_pincode(pincode):
    """Return the trimmed pincode when well-formed, otherwise None."""
    pincode = (pincode or '').strip()
    if len(pincode) != PINCODE_LENGTH:
        return None
    return pincode


def tier_queryset(tier, blood_group, pincode=None, queryset=None):
    """
    Donors satisfying a single tier, nearest locality first, then most
    recently registered.
    """
    qs = Donor.objects.all() if queryset is None else queryset
    qs = qs.filter(tier.predicate(blood_group, pincode))

    if pincode:
        qs = qs.annotate(
            locality_rank=Case(
                When(pincode=pincode, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        ).order_by('locality_rank', '-registration_date', '-pk')
    else:
        qs = qs.order_by('-registration_date', '-pk')

    if tier.limit:
        qs = qs[:tier.limit]
    return qs


def find_matching_donors(blood_group, pincode=None, queryset=None):
    """
    Walk the ladder until a tier yields donors.

    Args:
        blood_group (str): Normalised blood group, e.g. 'O+'
        pincode (str | None): Requested pincode; ignored unless well-formed
        queryset (QuerySet | None): Base donor queryset

    Returns:
        tuple: (tier name or None, list of Donor)
    """
    pincode = normalize_pincode(pincode)

    for tier in MATCH_LADDER:
        if tier.needs_pincode and not pincode:
            continue
        donors = list(tier_queryset(tier, blood_group, pincode, queryset=queryset))
        logger.debug("Tier %s for %s/%s matched %d donor(s)", tier.name, blood_group, pincode, len(donors))
        if donors:
            logger.info("Donor search %s/%s answered by tier %s (%d)", blood_group, pincode, tier.name, len(donors))
            return tier.name, donors

    logger.info("Donor search %s/%s found no donors", blood_group, pincode)
    return None, []


def calendar_age(date_of_birth, today=None):
    """
    Age as the difference of calendar years; birthdays are ignored.
    """
    if date_of_birth is None:
        return None
    today = today or timezone.localdate()
    return today.year - date_of_birth.year


def summarize_donor(donor, requested_group, today=None):
    location = {
        'pincode': getattr(donor, 'pincode', '') or '',
        'state': getattr(donor, 'state', '') or '',
        'district': getattr(donor, 'district', '') or '',
        'city': getattr(donor, 'city', '') or '',
    }
    if not any(location.values()):
        location = {}

    registration_date = (
        getattr(donor, 'registration_date', None)
        or getattr(donor, 'created_at', None)
        or timezone.now()
    )

    return {
        'id': str(donor.pk),
        'donorName': getattr(donor, 'donor_name', None) or 'Unknown',
        'phone': getattr(donor, 'phone', None) or '',
        'bloodGroup': getattr(donor, 'blood_group', None) or requested_group,
        'age': calendar_age(getattr(donor, 'date_of_birth', None), today=today),
        'location': location,
        'registrationDate': registration_date,
    }


def build_donor_summaries(donors, requested_group, today=None):
    """
    Shape donors for the client. A record that cannot be shaped is logged
    and left out; the rest are still returned.
    """
    summaries = []
    for donor in donors:
        try:
            summaries.append(summarize_donor(donor, requested_group, today=today))
        except (AttributeError, TypeError, ValueError):
            logger.warning("Skipping malformed donor record %r", getattr(donor, 'pk', None), exc_info=True)
    return summaries


def search_donors(blood_group, pincode=None, today=None):
    """
    Run the ladder and shape the result.

    Returns:
        tuple: (tier name or None, list of donor summaries)
    """
    tier, donors = find_matching_donors(blood_group, pincode)
    return tier, build_donor_summaries(donors, blood_group, today=today)
