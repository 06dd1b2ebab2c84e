"""
Mood log store, scoped to one user.
"""
import logging
from datetime import timedelta

from fasttracker.api import NotFound
from .models import MoodLog

logger = logging.getLogger(__name__)


def list_logs(user, days, now):
    """Check-ins from the last ``days`` days, newest first."""
    since = now - timedelta(days=days)
    return list(
        MoodLog.objects.filter(user=user, timestamp__gte=since)
        .order_by('-timestamp', '-id')
    )


def create(user, mood, energy, notes=''):
    log = MoodLog.objects.create(user=user, mood=mood, energy=energy, notes=notes)
    logger.info(f"User {user.pk} logged mood {mood!r} with energy {energy}")
    return log


def delete(user, log_id):
    try:
        log = MoodLog.objects.get(id=log_id, user=user)
    except MoodLog.DoesNotExist:
        raise NotFound('Mood log not found')
    log.delete()
    logger.info(f"User {user.pk} deleted mood log {log_id}")
