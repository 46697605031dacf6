from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from camps.models import BloodCamp
from camps.tasks import refresh_camp_statuses


def make_camp(camp_date, status='upcoming'):
    return BloodCamp.objects.create(
        camp_name='Drive', camp_date=camp_date, camp_time='09:00', location='Hall',
        state='Bagmati', district='Kathmandu', organizer='Red Cross', status=status,
    )


class RefreshCampStatusesTests(TestCase):
    def test_refresh(self):
        midday = timezone.localtime().replace(hour=12, minute=0, second=0, microsecond=0)
        today = make_camp(midday)
        past_upcoming = make_camp(midday - timedelta(days=3))
        past_ongoing = make_camp(midday - timedelta(days=1), status='ongoing')
        past_cancelled = make_camp(midday - timedelta(days=2), status='cancelled')
        future = make_camp(midday + timedelta(days=4))

        result = refresh_camp_statuses()

        self.assertEqual(result, {'started': 1, 'completed': 2})
        expected = {
            today: 'ongoing',
            past_upcoming: 'completed',
            past_ongoing: 'completed',
            past_cancelled: 'cancelled',
            future: 'upcoming',
        }
        for camp, status in expected.items():
            camp.refresh_from_db()
            self.assertEqual(camp.status, status)
