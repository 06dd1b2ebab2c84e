import json
from datetime import datetime, timedelta

import pytz
from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse
from django.utils import timezone

from hydration import store
from hydration.models import HydrationLog

User = get_user_model()


class HydrationStoreTests(TestCase):
    """Tests for the hydration log store"""

    def setUp(self):
        self.user = User.objects.create_user(username='ada@example.com', password='pass-word-123')

    def test_current_goal_defaults(self):
        self.assertEqual(store.current_goal(self.user), 2000)

    def test_current_goal_follows_latest_log(self):
        store.create(self.user, 250, 2500)
        store.create(self.user, 250, 3000)
        self.assertEqual(store.current_goal(self.user), 3000)

    def test_list_logs_uses_local_calendar_days(self):
        """Today in Los Angeles starts at 07:00 UTC during daylight saving"""
        la = pytz.timezone('America/Los_Angeles')
        now = datetime(2025, 6, 2, 18, 0, tzinfo=pytz.UTC)
        inside = HydrationLog.objects.create(
            user=self.user, amount=300, timestamp=datetime(2025, 6, 2, 7, 30, tzinfo=pytz.UTC)
        )
        HydrationLog.objects.create(
            user=self.user, amount=500, timestamp=datetime(2025, 6, 2, 6, 30, tzinfo=pytz.UTC)
        )
        self.assertEqual(store.list_logs(self.user, 1, now, la), [inside])
        self.assertEqual(len(store.list_logs(self.user, 2, now, la)), 2)


class HydrationAPITestCase(TestCase):
    """Tests for Hydration API endpoints"""

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='ada@example.com', password='pass-word-123')
        self.client.force_login(self.user)

    def post_log(self, data):
        return self.client.post(
            reverse('hydration:hydration_logs'), data=json.dumps(data), content_type='application/json'
        )

    def test_log_water(self):
        """Logging a drink returns 201 and shows up in today's total"""
        response = self.post_log({'amount': 250})
        self.assertEqual(response.status_code, 201)
        result = json.loads(response.content)
        self.assertEqual(result['data']['amount'], 250)
        self.assertEqual(result['data']['goal'], 2000)

        self.post_log({'amount': 500, 'goal': 2500})
        summary = json.loads(self.client.get(reverse('hydration:hydration_logs')).content)['data']
        self.assertEqual(summary['total'], 750)
        self.assertEqual(summary['goal'], 2500)
        self.assertEqual(len(summary['logs']), 2)

    def test_amount_required(self):
        for data in ({}, {'amount': 0}, {'amount': ''}):
            response = self.post_log(data)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(json.loads(response.content)['error'], 'Amount is required')
        self.assertFalse(HydrationLog.objects.exists())

    def test_amount_bounds(self):
        self.assertEqual(self.post_log({'amount': -100}).status_code, 400)
        self.assertEqual(self.post_log({'amount': 100000}).status_code, 400)
        self.assertEqual(self.post_log({'amount': 250, 'goal': 0}).status_code, 400)

    def test_old_logs_excluded_from_today(self):
        HydrationLog.objects.create(
            user=self.user, amount=400, timestamp=timezone.now() - timedelta(days=3)
        )
        summary = json.loads(self.client.get(reverse('hydration:hydration_logs')).content)['data']
        self.assertEqual(summary['total'], 0)
        summary = json.loads(
            self.client.get(reverse('hydration:hydration_logs'), {'days': 7}).content
        )['data']
        self.assertEqual(summary['total'], 400)

    def test_delete_log(self):
        log = HydrationLog.objects.create(user=self.user, amount=250)
        response = self.client.delete(reverse('hydration:delete_log', kwargs={'log_id': log.id}))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(HydrationLog.objects.exists())

    def test_delete_other_users_log(self):
        other = User.objects.create_user(username='bob@example.com', password='pass-word-123')
        log = HydrationLog.objects.create(user=other, amount=250)
        response = self.client.delete(reverse('hydration:delete_log', kwargs={'log_id': log.id}))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(json.loads(response.content)['error'], 'Hydration log not found')

    def test_requires_authentication(self):
        self.client.logout()
        response = self.post_log({'amount': 250})
        self.assertEqual(response.status_code, 401)
        self.assertFalse(HydrationLog.objects.exists())
