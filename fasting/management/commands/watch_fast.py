"""
Django management command to follow a user's active fast from the terminal.

Prints the live clock and fasting stage once a second and records the
goal-reached notification when the goal is crossed.

Usage:
    python manage.py watch_fast <username>
    python manage.py watch_fast someone@example.com --ticks 10
"""
import queue

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from fasting import store
from fasting.services.analytics import goal_progress
from fasting.services.formatting import format_clock
from fasting.services.stages import classify
from fasting.services.timer import FastingTimer
from notifications.services import notify_goal_reached

# Seconds to wait for a tick before checking the session again
EVENT_TIMEOUT = 5


class Command(BaseCommand):
    help = "Watch a user's active fast: live clock, stage and goal notification"

    def add_arguments(self, parser):
        parser.add_argument(
            'username',
            type=str,
            help='Username (email) of the user whose fast to watch'
        )
        parser.add_argument(
            '--ticks',
            type=int,
            default=None,
            help='Stop after this many ticks (default: until the fast stops or Ctrl-C)'
        )

    def handle(self, *args, **options):
        username = options['username']
        max_ticks = options['ticks']
        if max_ticks is not None and max_ticks < 1:
            raise CommandError('--ticks must be at least 1')

        User = get_user_model()
        try:
            user = User.objects.get(username=username)
        except User.DoesNotExist:
            raise CommandError(f'User not found: {username}')

        session = store.list_active(user)
        if session is None:
            raise CommandError(f'{username} has no active fast')

        self.stdout.write(self.style.SUCCESS(
            f'Watching fast {session.pk} started {session.start_time.isoformat()} '
            f'(goal {session.goal_hours:g}h)'
        ))

        # Timer callbacks run on the scheduler thread; database work stays here
        events = queue.Queue()
        timer = FastingTimer(
            session.start_time,
            session.goal_hours,
            on_tick=lambda elapsed: events.put(('tick', elapsed)),
            on_goal_reached=lambda hours: events.put(('goal', hours)),
            job_id=f'watch-fast-{session.pk}',
        )

        ticks = 0
        try:
            timer.start()
            while True:
                try:
                    kind, value = events.get(timeout=EVENT_TIMEOUT)
                except queue.Empty:
                    kind, value = 'idle', None

                if kind == 'goal':
                    notify_goal_reached(user, session)
                    self.stdout.write(self.style.SUCCESS(f'Goal of {value:g}h reached!'))
                    continue

                current = store.list_active(user)
                if current is None or current.pk != session.pk:
                    self.stdout.write(self.style.WARNING('Fast stopped'))
                    break
                if current.goal_hours != timer.goal_hours:
                    self.stdout.write(f'Goal changed to {current.goal_hours:g}h')
                    timer.update_goal(current.goal_hours)
                    session = current

                if kind == 'tick':
                    ticks += 1
                    self.stdout.write(self._status_line(value, session.goal_hours))
                    if max_ticks is not None and ticks >= max_ticks:
                        break
        except KeyboardInterrupt:
            self.stdout.write(self.style.WARNING('\nInterrupted'))
        finally:
            timer.cancel()

        self.stdout.write(f'Stopped after {ticks} tick(s)')

    def _status_line(self, elapsed, goal_hours):
        stage = classify(elapsed)
        progress = goal_progress(elapsed, goal_hours)
        return (
            f'{format_clock(elapsed)}  {stage.current.label:<20} '
            f'{progress:5.1f}% of {goal_hours:g}h'
        )
