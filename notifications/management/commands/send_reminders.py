"""
Django management command to remind users who have not fasted today.

Meant to run once a day from cron. A user is reminded when they have
fasted before, have no active fast, and have not started one today in
the reference time zone. Users with notifications off are skipped by
notify_reminder itself.

Usage:
    python manage.py send_reminders
    python manage.py send_reminders --dry-run
    python manage.py send_reminders --message "Ready for tonight's fast?"
"""
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from fasting import store
from fasttracker.timezone_utils import get_reference_timezone, local_date
from notifications.services import notify_reminder

DEFAULT_MESSAGE = "You haven't started a fast today. Ready when you are!"


class Command(BaseCommand):
    help = 'Send a fasting reminder to users who have not fasted today'

    def add_arguments(self, parser):
        parser.add_argument(
            '--message',
            type=str,
            default=DEFAULT_MESSAGE,
            help='Reminder text to send'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List who would be reminded without sending anything'
        )

    def handle(self, *args, **options):
        message = options['message']
        dry_run = options['dry_run']
        tz = get_reference_timezone()
        today = local_date(timezone.now(), tz)

        User = get_user_model()
        users = User.objects.filter(fasting_sessions__isnull=False).distinct().order_by('pk')

        due = sent = 0
        for user in users:
            if not self._needs_reminder(user, today, tz):
                continue
            due += 1
            if dry_run:
                self.stdout.write(f'Would remind {user.username}')
                continue
            if notify_reminder(user, message) is not None:
                sent += 1
                self.stdout.write(f'Reminded {user.username}')

        if dry_run:
            self.stdout.write(self.style.WARNING(f'Dry run: {due} user(s) due a reminder'))
        else:
            self.stdout.write(self.style.SUCCESS(
                f'Sent {sent} reminder(s); {due - sent} skipped with notifications off'
            ))

    def _needs_reminder(self, user, today, tz):
        if store.list_active(user) is not None:
            return False
        latest = store.list_history(user, 1)
        return not latest or local_date(latest[0].start_time, tz) != today
