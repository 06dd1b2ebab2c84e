import json

from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse

from notifications.models import Notification
from notifications.services import notify

User = get_user_model()


class NotificationAPITestCase(TestCase):
    """Tests for Notification API endpoints"""

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='ada@example.com', password='pass-word-123')
        self.client.force_login(self.user)

    def test_list_undismissed(self):
        notify(self.user, 'First')
        notify(self.user, 'Second')
        response = self.client.get(reverse('notifications:notification_list'))
        data = json.loads(response.content)['data']
        self.assertEqual([n['title'] for n in data], ['Second', 'First'])

    def test_dismiss(self):
        notification = notify(self.user, 'Hello')
        response = self.client.post(reverse('notifications:dismiss', kwargs={'notification_id': notification.id}))
        self.assertEqual(response.status_code, 200)
        notification.refresh_from_db()
        self.assertTrue(notification.is_dismissed)

        data = json.loads(self.client.get(reverse('notifications:notification_list')).content)['data']
        self.assertEqual(data, [])

    def test_dismiss_other_users_notification(self):
        other = User.objects.create_user(username='bob@example.com', password='pass-word-123')
        notification = notify(other, 'Private')
        response = self.client.post(reverse('notifications:dismiss', kwargs={'notification_id': notification.id}))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(json.loads(response.content)['error'], 'Notification not found')

    def test_preferences(self):
        url = reverse('notifications:preferences')
        self.assertEqual(json.loads(self.client.get(url).content)['data'], {'enabled': True})

        response = self.client.post(url, data=json.dumps({'enabled': False}), content_type='application/json')
        self.assertEqual(json.loads(response.content)['data'], {'enabled': False})
        self.assertIsNone(notify(self.user, 'Dropped'))
        self.assertFalse(Notification.objects.exists())

    def test_preferences_validation(self):
        response = self.client.post(
            reverse('notifications:preferences'), data=json.dumps({'enabled': 'no'}), content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(json.loads(response.content)['error'], 'enabled must be true or false')
