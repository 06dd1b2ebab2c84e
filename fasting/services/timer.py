"""
One-second timer for an active fast.

FastingTimer owns a single APScheduler interval job for as long as a fast is
running. Each tick recomputes the elapsed time and, the first time the goal
is crossed, fires the goal-reached callback. Cancelling removes the job and
is safe to call any number of times.
"""
import logging
import math
import threading
import uuid

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from django.utils import timezone

logger = logging.getLogger(__name__)

TICK_SECONDS = 1


def elapsed_since(start_time, now):
    """Whole seconds between start_time and now, never negative."""
    return max(math.floor((now - start_time).total_seconds()), 0)


class FastingTimer:
    """Drives live updates for one active fasting session."""

    def __init__(self, start_time, goal_hours, on_tick=None, on_goal_reached=None,
                 scheduler=None, clock=timezone.now, job_id=None):
        """
        Args:
            start_time: Aware datetime the fast started
            goal_hours: Target duration in hours
            on_tick: Called with the elapsed seconds after every tick
            on_goal_reached: Called once with goal_hours when the goal is crossed
            scheduler: Running APScheduler scheduler to share; when omitted the
                timer starts (and later shuts down) its own BackgroundScheduler
            clock: Callable returning the current aware datetime
            job_id: Scheduler job id, unique per timer
        """
        self.start_time = start_time
        self.goal_hours = goal_hours
        self.on_tick = on_tick
        self.on_goal_reached = on_goal_reached
        self.clock = clock
        self.job_id = job_id or f"fasting-timer-{uuid.uuid4().hex}"
        self.elapsed_seconds = 0

        self._scheduler = scheduler
        self._owns_scheduler = scheduler is None
        self._job = None
        self._goal_reached = False
        self._lock = threading.Lock()

    @property
    def goal_reached(self):
        return self._goal_reached

    @property
    def running(self):
        return self._job is not None

    def start(self):
        """Schedule the one-second tick. Does nothing if already running."""
        if self._job is not None:
            logger.warning(f"Timer {self.job_id} already running")
            return

        if self._scheduler is None:
            self._scheduler = BackgroundScheduler()
        if not self._scheduler.running:
            self._scheduler.start()

        # Catch up immediately so a fast already past its goal notifies at once
        self.tick()
        self._job = self._scheduler.add_job(
            func=self.tick,
            trigger=IntervalTrigger(seconds=TICK_SECONDS),
            id=self.job_id,
            name="Fasting timer",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        logger.info(f"Started timer {self.job_id} for fast started at {self.start_time.isoformat()}")

    def tick(self):
        """Recompute elapsed time and fire the goal callback once."""
        elapsed = elapsed_since(self.start_time, self.clock())
        self.elapsed_seconds = elapsed

        fire = False
        with self._lock:
            if not self._goal_reached and elapsed / 3600 >= self.goal_hours:
                self._goal_reached = True
                fire = True

        if fire:
            logger.info(f"Timer {self.job_id} reached the {self.goal_hours}h goal")
            if self.on_goal_reached is not None:
                self.on_goal_reached(self.goal_hours)
        if self.on_tick is not None:
            self.on_tick(elapsed)
        return elapsed

    def update_goal(self, goal_hours):
        """Change the goal and re-arm the goal-reached callback."""
        with self._lock:
            self.goal_hours = goal_hours
            self._goal_reached = False

    def cancel(self):
        """Stop ticking. Safe to call when never started or already cancelled."""
        job, self._job = self._job, None
        if job is not None and self._scheduler is not None:
            try:
                self._scheduler.remove_job(self.job_id)
            except JobLookupError:
                pass
            logger.info(f"Cancelled timer {self.job_id}")

        if self._owns_scheduler and self._scheduler is not None:
            if self._scheduler.running:
                self._scheduler.shutdown(wait=False)
            self._scheduler = None
