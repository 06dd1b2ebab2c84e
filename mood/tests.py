import json
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse
from django.utils import timezone

from mood import store
from mood.models import MoodLog

User = get_user_model()


class MoodAPITestCase(TestCase):
    """Tests for Mood API endpoints"""

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='ada@example.com', password='pass-word-123')
        self.client.force_login(self.user)

    def post_log(self, data):
        return self.client.post(
            reverse('mood:mood_logs'), data=json.dumps(data), content_type='application/json'
        )

    def test_log_mood(self):
        response = self.post_log({'mood': '🙂', 'energy': 4, 'notes': ' slept well '})
        self.assertEqual(response.status_code, 201)
        data = json.loads(response.content)['data']
        self.assertEqual(data['mood'], '🙂')
        self.assertEqual(data['energy'], 4)
        self.assertEqual(data['notes'], 'slept well')

    def test_mood_required(self):
        response = self.post_log({'energy': 3})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(json.loads(response.content)['error'], 'Mood is required')

    def test_energy_range(self):
        """Energy is a whole number from 1 to 5"""
        for energy in (0, 6, 2.5, 'high', None):
            response = self.post_log({'mood': '😐', 'energy': energy})
            self.assertEqual(response.status_code, 400, energy)
        self.assertFalse(MoodLog.objects.exists())

    def test_notes_length(self):
        response = self.post_log({'mood': '😐', 'energy': 3, 'notes': 'x' * 201})
        self.assertEqual(response.status_code, 400)

    def test_list_recent_days(self):
        """Only check-ins from the last week are listed by default"""
        MoodLog.objects.create(user=self.user, mood='😀', energy=5)
        MoodLog.objects.create(
            user=self.user, mood='😞', energy=1, timestamp=timezone.now() - timedelta(days=10)
        )
        logs = json.loads(self.client.get(reverse('mood:mood_logs')).content)['data']
        self.assertEqual([log['mood'] for log in logs], ['😀'])
        logs = json.loads(self.client.get(reverse('mood:mood_logs'), {'days': 30}).content)['data']
        self.assertEqual(len(logs), 2)

    def test_store_is_scoped_to_user(self):
        other = User.objects.create_user(username='bob@example.com', password='pass-word-123')
        store.create(other, '😀', 5)
        self.assertEqual(store.list_logs(self.user, 7, timezone.now()), [])

    def test_delete_log(self):
        log = MoodLog.objects.create(user=self.user, mood='😀', energy=5)
        response = self.client.delete(reverse('mood:delete_log', kwargs={'log_id': log.id}))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(MoodLog.objects.exists())

    def test_delete_missing_log(self):
        response = self.client.delete(reverse('mood:delete_log', kwargs={'log_id': 12345}))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(json.loads(response.content)['error'], 'Mood log not found')
