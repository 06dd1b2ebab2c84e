from datetime import timedelta

from apscheduler.schedulers.background import BackgroundScheduler
from django.test import SimpleTestCase

from fasting.services.timer import FastingTimer, elapsed_since
from .helpers import REFERENCE_NOW


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class ElapsedSinceTests(SimpleTestCase):

    def test_floors_to_whole_seconds(self):
        start = REFERENCE_NOW
        self.assertEqual(elapsed_since(start, start + timedelta(seconds=59, milliseconds=999)), 59)

    def test_never_negative(self):
        self.assertEqual(elapsed_since(REFERENCE_NOW, REFERENCE_NOW - timedelta(minutes=5)), 0)


class FastingTimerTests(SimpleTestCase):
    """Tests for the one-second fasting timer"""

    def setUp(self):
        self.scheduler = BackgroundScheduler()
        # Paused so jobs are registered but never run on their own
        self.scheduler.start(paused=True)
        self.clock = FakeClock(REFERENCE_NOW)
        self.ticks = []
        self.goals = []

    def tearDown(self):
        self.scheduler.shutdown(wait=False)

    def make_timer(self, hours_ago=0, goal_hours=16):
        return FastingTimer(
            start_time=REFERENCE_NOW - timedelta(hours=hours_ago),
            goal_hours=goal_hours,
            on_tick=self.ticks.append,
            on_goal_reached=self.goals.append,
            scheduler=self.scheduler,
            clock=self.clock,
        )

    def test_start_schedules_one_job_and_ticks(self):
        """start() ticks right away and registers the interval job"""
        timer = self.make_timer(hours_ago=1)
        timer.start()
        self.assertTrue(timer.running)
        self.assertEqual(self.ticks, [3600])
        job = self.scheduler.get_job(timer.job_id)
        self.assertIsNotNone(job)
        self.assertEqual(job.trigger.interval, timedelta(seconds=1))
        self.assertEqual(job.max_instances, 1)

    def test_start_twice_is_a_no_op(self):
        timer = self.make_timer()
        timer.start()
        timer.start()
        self.assertEqual(len(self.scheduler.get_jobs()), 1)
        self.assertEqual(len(self.ticks), 1)

    def test_goal_fires_exactly_once(self):
        """Crossing the goal notifies once, later ticks stay quiet"""
        timer = self.make_timer(goal_hours=1)
        timer.tick()
        self.assertEqual(self.goals, [])

        self.clock.advance(minutes=59, seconds=59)
        timer.tick()
        self.assertEqual(self.goals, [])
        self.assertFalse(timer.goal_reached)

        self.clock.advance(seconds=1)
        timer.tick()
        self.assertEqual(self.goals, [1])
        self.assertTrue(timer.goal_reached)

        for _ in range(5):
            self.clock.advance(seconds=1)
            timer.tick()
        self.assertEqual(self.goals, [1])
        self.assertEqual(self.ticks[-1], 3605)

    def test_already_past_goal_fires_on_start(self):
        timer = self.make_timer(hours_ago=17, goal_hours=16)
        timer.start()
        self.assertEqual(self.goals, [16])

    def test_update_goal_rearms(self):
        """Raising the goal lets the callback fire again at the new goal"""
        timer = self.make_timer(hours_ago=2, goal_hours=1)
        timer.tick()
        timer.update_goal(3)
        self.assertFalse(timer.goal_reached)
        timer.tick()
        self.assertEqual(self.goals, [1])
        self.clock.advance(hours=1)
        timer.tick()
        self.assertEqual(self.goals, [1, 3])

    def test_cancel_removes_job_and_is_idempotent(self):
        timer = self.make_timer()
        timer.start()
        timer.cancel()
        self.assertFalse(timer.running)
        self.assertIsNone(self.scheduler.get_job(timer.job_id))
        timer.cancel()
        # A shared scheduler is left running for its owner
        self.assertTrue(self.scheduler.running)

    def test_cancel_before_start(self):
        timer = self.make_timer()
        timer.cancel()
        self.assertFalse(timer.running)

    def test_cancel_after_job_already_gone(self):
        timer = self.make_timer()
        timer.start()
        self.scheduler.remove_job(timer.job_id)
        timer.cancel()
        self.assertFalse(timer.running)

    def test_owned_scheduler_is_shut_down(self):
        """A timer without a scheduler creates one and stops it on cancel"""
        timer = FastingTimer(REFERENCE_NOW, 16, clock=self.clock)
        timer.start()
        scheduler = timer._scheduler
        self.assertTrue(scheduler.running)
        timer.cancel()
        self.assertFalse(scheduler.running)
        self.assertIsNone(timer._scheduler)
