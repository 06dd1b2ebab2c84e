from django.test import SimpleTestCase

from fasting.services.analytics import FastingSummary, goal_progress, summarize
from .helpers import days_ago, make_session


class SummaryTests(SimpleTestCase):
    """Tests for the summary statistics"""

    def test_empty_history_is_all_zero(self):
        """No sessions means zeros, not a division error"""
        summary = summarize([])
        self.assertEqual(summary, FastingSummary())
        self.assertEqual(summary.as_dict(), {
            'total_sessions': 0,
            'average_duration': 0,
            'success_rate': 0,
            'longest_fast': 0,
            'total_hours_fasted': 0,
        })

    def test_mixed_history(self):
        """One 16h success and one 12h miss"""
        sessions = [
            make_session(days_ago(1), hours=16, goal_reached=True),
            make_session(days_ago(2), hours=12, goal_reached=False),
        ]
        summary = summarize(sessions)
        self.assertEqual(summary.total_sessions, 2)
        self.assertEqual(summary.average_duration, 50400)
        self.assertEqual(summary.success_rate, 50)
        self.assertEqual(summary.longest_fast, 57600)
        self.assertEqual(summary.total_hours_fasted, 28)

    def test_order_does_not_matter(self):
        sessions = [make_session(days_ago(n), hours=10 + n) for n in range(5)]
        self.assertEqual(summarize(sessions), summarize(list(reversed(sessions))))

    def test_accepts_any_iterable(self):
        sessions = (make_session(days_ago(n)) for n in range(3))
        self.assertEqual(summarize(sessions).total_sessions, 3)


class GoalProgressTests(SimpleTestCase):

    def test_halfway(self):
        self.assertEqual(goal_progress(8 * 3600, 16), 50)

    def test_capped_at_100(self):
        self.assertEqual(goal_progress(20 * 3600, 16), 100)

    def test_negative_elapsed_is_zero(self):
        self.assertEqual(goal_progress(-10, 16), 0)
