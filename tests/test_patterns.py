"""
Pattern tests: executable documentation of the codebase's critical invariants.

These tests exist to demonstrate (and enforce) the patterns every new view or
store must follow. Read these before writing new code.

Run with: python manage.py test tests.test_patterns
"""
import json
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import patch

import pytz
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.test import TestCase, RequestFactory
from django.urls import reverse
from django.utils import timezone

from fasting.models import FastingSession
from fasttracker.api import (
    Conflict,
    InvalidRequest,
    NotFound,
    api_endpoint,
    parse_instant,
    parse_number,
    success,
)
from fasttracker.timezone_utils import day_bounds, get_user_timezone, get_user_today, recent_days
from hydration.models import HydrationLog
from mood.models import MoodLog

User = get_user_model()


class UserScopingTests(TestCase):
    """
    PATTERN: Every Query Is Scoped To request.user

    Stores take the user as their first argument and filter on it. Another
    user's record id must behave exactly like a missing id (404), never 403,
    so ids leak nothing.
    """

    def setUp(self):
        self.owner = User.objects.create_user(username='owner@example.com', password='pass-word-123')
        self.intruder = User.objects.create_user(username='intruder@example.com', password='pass-word-123')
        self.client.force_login(self.intruder)

    def test_delete_endpoints_hide_other_users_records(self):
        """Deleting someone else's record is a 404 and the record survives."""
        session = FastingSession.objects.create(user=self.owner, start_time=timezone.now())
        water = HydrationLog.objects.create(user=self.owner, amount=250)
        mood = MoodLog.objects.create(user=self.owner, mood='🙂', energy=3)

        for url in (
            reverse('fasting:delete_session', kwargs={'session_id': session.id}),
            reverse('hydration:delete_log', kwargs={'log_id': water.id}),
            reverse('mood:delete_log', kwargs={'log_id': mood.id}),
        ):
            self.assertEqual(self.client.delete(url).status_code, 404, url)

        self.assertTrue(FastingSession.objects.filter(id=session.id).exists())
        self.assertTrue(HydrationLog.objects.filter(id=water.id).exists())
        self.assertTrue(MoodLog.objects.filter(id=mood.id).exists())

    def test_lists_only_show_own_records(self):
        HydrationLog.objects.create(user=self.owner, amount=250)
        MoodLog.objects.create(user=self.owner, mood='🙂', energy=3)
        hydration = json.loads(self.client.get(reverse('hydration:hydration_logs')).content)['data']
        mood = json.loads(self.client.get(reverse('mood:mood_logs')).content)['data']
        self.assertEqual(hydration['logs'], [])
        self.assertEqual(mood, [])


class SingleActiveSessionTests(TestCase):
    """
    PATTERN: One Active Fast Per User

    Enforced three times: the start view checks first, the store checks inside
    a transaction, and a partial unique constraint backs both up.
    """

    def setUp(self):
        self.user = User.objects.create_user(username='ada@example.com', password='pass-word-123')

    def test_database_rejects_second_active_session(self):
        FastingSession.objects.create(user=self.user, start_time=timezone.now())
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                FastingSession.objects.create(user=self.user, start_time=timezone.now())

    def test_completed_sessions_are_unconstrained(self):
        for _ in range(3):
            FastingSession.objects.create(user=self.user, start_time=timezone.now(), is_active=False)
        FastingSession.objects.create(user=self.user, start_time=timezone.now())
        self.assertEqual(FastingSession.objects.filter(user=self.user).count(), 4)


class TimezoneHandlingTests(TestCase):
    """
    PATTERN: Timezone from Browser Cookie

    The user's timezone is read from `request.COOKIES['user_timezone']`.
    All datetimes are stored in UTC. Calendar-day bucketing and display use
    `get_user_timezone(request)` from fasttracker.timezone_utils.
    """

    def setUp(self):
        self.factory = RequestFactory()

    def test_timezone_from_cookie(self):
        """get_user_timezone reads from the cookie."""
        request = self.factory.get('/')
        request.COOKIES['user_timezone'] = 'America/Los_Angeles'
        tz = get_user_timezone(request)
        self.assertEqual(str(tz), 'America/Los_Angeles')

    def test_timezone_defaults_to_reference(self):
        """Missing cookie falls back to the configured TIME_ZONE (UTC)."""
        request = self.factory.get('/')
        request.COOKIES = {}
        self.assertEqual(str(get_user_timezone(request)), 'UTC')

    def test_invalid_timezone_falls_back(self):
        request = self.factory.get('/')
        request.COOKIES['user_timezone'] = 'Not/A/Timezone'
        self.assertEqual(str(get_user_timezone(request)), 'UTC')

    def test_get_user_today_returns_correct_date_for_timezone(self):
        """
        When it's 11 PM in LA (which is 7 AM next day UTC),
        get_user_today should return the LA date, not the UTC date.
        """
        request = self.factory.get('/')
        request.COOKIES['user_timezone'] = 'America/Los_Angeles'

        # Mock: 7 AM UTC on Jan 16 = 11 PM PST on Jan 15
        mock_now = datetime(2025, 1, 16, 7, 0, 0, tzinfo=dt_timezone.utc)
        with patch('django.utils.timezone.now', return_value=mock_now):
            today, today_start, today_end = get_user_today(request)

        self.assertEqual(today.day, 15)
        self.assertEqual(today_start.astimezone(dt_timezone.utc).hour, 8)

    def test_day_bounds_are_new_aware_values(self):
        """day_bounds covers 00:00:00.000000 to 23:59:59.999999 local time."""
        eastern = pytz.timezone('US/Eastern')
        day = datetime(2025, 3, 9).date()
        start, end = day_bounds(day, eastern)
        self.assertEqual((start.hour, start.minute), (0, 0))
        self.assertEqual((end.hour, end.minute, end.second, end.microsecond), (23, 59, 59, 999999))
        # DST starts on this date, so the offsets differ
        self.assertNotEqual(start.utcoffset(), end.utcoffset())

    def test_recent_days_end_today(self):
        now = datetime(2025, 1, 16, 7, 0, tzinfo=dt_timezone.utc)
        days = recent_days(now, pytz.timezone('America/Los_Angeles'), 3)
        self.assertEqual([d.day for d in days], [13, 14, 15])

    def test_iso_8601_parsing_pattern(self):
        """Frontend sends Z-suffix timestamps or Date.now() milliseconds."""
        parsed = parse_instant('2025-03-15T14:30:00Z', 'start_time')
        self.assertEqual((parsed.year, parsed.month, parsed.hour), (2025, 3, 14))
        self.assertIsNotNone(parsed.tzinfo)
        millis = parse_instant(1742049000000, 'start_time')
        self.assertEqual(millis, parsed)
        self.assertIsNone(parse_instant(None, 'start_time'))
        with self.assertRaises(InvalidRequest):
            parse_instant('yesterday', 'start_time')


class ApiResponseFormatTests(TestCase):
    """
    PATTERN: API Response Format

    All endpoints return {'success': bool, 'data': ...} or
    {'success': False, 'error': '...'} with a matching status code.
    Views raise TrackerError subclasses; @api_endpoint turns them into
    responses. Never build an error JsonResponse by hand in a view.
    """

    def setUp(self):
        self.factory = RequestFactory()
        self.user = User.objects.create_user(username='ada@example.com', password='pass-word-123')

    def call(self, view, method='get'):
        request = getattr(self.factory, method)('/')
        request.user = self.user
        response = view(request)
        return response.status_code, json.loads(response.content)

    def test_success_response_format(self):
        @api_endpoint(["GET"])
        def view(request):
            return success({'id': 1})

        status, body = self.call(view)
        self.assertEqual(status, 200)
        self.assertEqual(body, {'success': True, 'data': {'id': 1}})

    def test_errors_map_to_status_codes(self):
        for error, expected in ((InvalidRequest, 400), (NotFound, 404), (Conflict, 409)):
            @api_endpoint(["GET"])
            def view(request):
                raise error('Nope')

            status, body = self.call(view)
            self.assertEqual(status, expected)
            self.assertEqual(body, {'success': False, 'error': 'Nope'})

    def test_unexpected_errors_are_500(self):
        @api_endpoint(["GET"])
        def view(request):
            raise RuntimeError('database went away')

        with self.assertLogs('fasttracker.api', level='ERROR'):
            status, body = self.call(view)
        self.assertEqual(status, 500)
        self.assertFalse(body['success'])
        self.assertIn('database went away', body['error'])

    def test_parse_number_bounds(self):
        self.assertEqual(parse_number('2.5', 'goal_hours'), 2.5)
        self.assertEqual(parse_number(3, 'energy', minimum=1, maximum=5, integer=True), 3)
        for value in (True, 'abc', None, 'nan', float('inf')):
            with self.assertRaises(InvalidRequest):
                parse_number(value, 'amount')
        with self.assertRaisesMessage(InvalidRequest, 'energy must be at most 5'):
            parse_number(6, 'energy', maximum=5)
